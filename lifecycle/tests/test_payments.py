from decimal import Decimal

from django.test import SimpleTestCase, override_settings

from lifecycle.payments import SimulatedPaymentProvider


class SimulatedPaymentProviderTests(SimpleTestCase):
    def test_card_payment_with_plausible_number_is_approved(self):
        result = SimulatedPaymentProvider(delay=0).charge(
            Decimal("100"), method="card", card_number="4242 4242 4242 4242"
        )
        self.assertTrue(result.approved)
        self.assertTrue(result.reference.startswith("SIM-"))
        self.assertEqual(len(result.reference), 16)

    def test_references_are_unique(self):
        provider = SimulatedPaymentProvider(delay=0)
        refs = {provider.charge(Decimal("1"), method="cash").reference for _ in range(5)}
        self.assertEqual(len(refs), 5)

    def test_cash_needs_no_card_number(self):
        result = SimulatedPaymentProvider(delay=0).charge(Decimal("100"), method="cash")
        self.assertTrue(result.approved)

    def test_short_or_non_numeric_card_number_is_declined(self):
        provider = SimulatedPaymentProvider(delay=0)
        for number in ("", "1234", "4242-4242-4242-4242", "12345678901234567890"):
            result = provider.charge(Decimal("100"), method="card", card_number=number)
            self.assertFalse(result.approved, number)
            self.assertEqual(result.reference, "")

    def test_unknown_method_is_declined(self):
        result = SimulatedPaymentProvider(delay=0).charge(Decimal("100"), method="crypto")
        self.assertFalse(result.approved)

    def test_force_decline(self):
        result = SimulatedPaymentProvider(delay=0, force_decline=True).charge(
            Decimal("100"), method="cash"
        )
        self.assertFalse(result.approved)
        self.assertEqual(result.message, "The payment was declined.")

    def test_waits_for_the_configured_delay(self):
        waits = []
        SimulatedPaymentProvider(delay=1.5, sleep=waits.append).charge(Decimal("1"), method="cash")
        self.assertEqual(waits, [1.5])

    @override_settings(PAYMENT_SIMULATION_DELAY=0.25, PAYMENT_SIMULATION_FORCE_DECLINE=True)
    def test_defaults_come_from_settings(self):
        waits = []
        result = SimulatedPaymentProvider(sleep=waits.append).charge(Decimal("1"), method="cash")
        self.assertEqual(waits, [0.25])
        self.assertFalse(result.approved)

    @override_settings(PAYMENT_SIMULATION_DELAY=0)
    def test_zero_delay_does_not_sleep(self):
        waits = []
        SimulatedPaymentProvider(sleep=waits.append).charge(Decimal("1"), method="cash")
        self.assertEqual(waits, [])
