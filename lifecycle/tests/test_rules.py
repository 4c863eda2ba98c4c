from decimal import Decimal

from django.test import SimpleTestCase

from lifecycle import rules
from lifecycle.exceptions import (
    AlreadyConverted,
    InvalidState,
    InvalidTransition,
    MissingField,
    NotAuthorized,
)
from lifecycle.identity import ANONYMOUS, Actor


class RequestTransitionRuleTests(SimpleTestCase):
    def test_pending_can_move_to_reviewing_approved_or_rejected(self):
        for target in ("reviewing", "approved", "rejected"):
            self.assertTrue(rules.check_admin_request_transition("pending", target))

    def test_reviewing_can_move_to_approved_or_rejected(self):
        self.assertTrue(rules.check_admin_request_transition("reviewing", "approved"))
        self.assertTrue(rules.check_admin_request_transition("reviewing", "rejected"))

    def test_reviewing_cannot_go_back_to_pending(self):
        with self.assertRaises(InvalidState):
            rules.check_admin_request_transition("reviewing", "pending")

    def test_same_status_is_a_noop(self):
        for current in ("pending", "reviewing", "approved", "rejected"):
            self.assertFalse(rules.check_admin_request_transition(current, current))

    def test_rejected_is_terminal(self):
        for target in ("pending", "reviewing", "approved"):
            with self.assertRaises(InvalidTransition):
                rules.check_admin_request_transition("rejected", target)

    def test_reviewing_to_converted_directly_fails(self):
        with self.assertRaises(InvalidState):
            rules.check_admin_request_transition("reviewing", "converted")

    def test_admin_cannot_convert_an_approved_request(self):
        with self.assertRaises(InvalidState):
            rules.check_admin_request_transition("approved", "converted")

    def test_converted_again_raises_already_converted(self):
        with self.assertRaises(AlreadyConverted):
            rules.check_admin_request_transition("converted", "converted")

    def test_converted_is_terminal_for_admins(self):
        with self.assertRaises(InvalidState):
            rules.check_admin_request_transition("converted", "approved")

    def test_unknown_target_raises_invalid_state(self):
        with self.assertRaises(InvalidState):
            rules.check_admin_request_transition("pending", "archived")


class ApprovedPriceRuleTests(SimpleTestCase):
    def test_valid_prices_are_parsed(self):
        self.assertEqual(rules.parse_approved_price("15000"), Decimal("15000"))
        self.assertEqual(rules.parse_approved_price(99.5), Decimal("99.5"))

    def test_missing_zero_negative_or_garbage_price_is_rejected(self):
        for value in (None, "", "0", 0, "-5", "abc", "NaN"):
            with self.assertRaises(MissingField) as ctx:
                rules.parse_approved_price(value)
            self.assertEqual(ctx.exception.field, "approved_price")


class ConversionRuleTests(SimpleTestCase):
    def test_approved_with_price_is_convertible(self):
        rules.check_conversion("approved", Decimal("100"))

    def test_converted_raises_already_converted(self):
        with self.assertRaises(AlreadyConverted):
            rules.check_conversion("converted", Decimal("100"))

    def test_not_yet_approved_raises_invalid_state(self):
        for current in ("pending", "reviewing", "rejected"):
            with self.assertRaises(InvalidState):
                rules.check_conversion(current, None)

    def test_approved_without_price_raises_missing_field(self):
        with self.assertRaises(MissingField):
            rules.check_conversion("approved", None)


class ProjectRuleTests(SimpleTestCase):
    def test_next_status_walks_the_pipeline(self):
        self.assertEqual(rules.next_project_status("pending"), "in_progress")
        self.assertEqual(rules.next_project_status("in_progress"), "review")
        self.assertEqual(rules.next_project_status("review"), "completed")
        self.assertIsNone(rules.next_project_status("completed"))

    def test_only_single_forward_step_is_allowed(self):
        flow = rules.PROJECT_FLOW
        for i, current in enumerate(flow):
            for j, target in enumerate(flow):
                if j == i:
                    self.assertFalse(rules.check_project_transition(current, target))
                elif j == i + 1:
                    self.assertTrue(rules.check_project_transition(current, target))
                else:
                    with self.assertRaises(InvalidState):
                        rules.check_project_transition(current, target)

    def test_pending_to_completed_directly_fails(self):
        with self.assertRaises(InvalidState):
            rules.check_project_transition("pending", "completed")

    def test_progress_in_quarters(self):
        self.assertEqual(
            [rules.project_progress(s) for s in rules.PROJECT_FLOW], [25, 50, 75, 100]
        )


class RequireAdminTests(SimpleTestCase):
    def test_admin_passes(self):
        rules.require_admin(Actor(user_id=1, is_admin=True), "do things")

    def test_client_and_anonymous_are_rejected(self):
        for actor in (Actor(user_id=2), ANONYMOUS):
            with self.assertRaises(NotAuthorized):
                rules.require_admin(actor, "do things")
