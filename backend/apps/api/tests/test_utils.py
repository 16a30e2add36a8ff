import unittest

from rest_framework import status

from apps.api.utils import error_response, status_for_code


class ErrorResponseTests(unittest.TestCase):
    def test_default_status_mapping_and_details(self):
        resp = error_response("NOT_FOUND", "missing", {"id": 1})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(resp.data["error"]["status"], status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["details"], {"id": 1})

    def test_business_codes_have_fixed_statuses(self):
        self.assertEqual(status_for_code("NO_ACTIVE_CART"), 404)
        self.assertEqual(status_for_code("EMPTY_CART"), 400)
        self.assertEqual(status_for_code("duplicate_item"), 409)
        self.assertEqual(status_for_code("INSUFFICIENT_STOCK"), 409)
        self.assertEqual(status_for_code("INFRASTRUCTURE_ERROR"), 503)

    def test_unknown_code_falls_back_to_bad_request(self):
        resp = error_response("SOMETHING_ELSE", "oops")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_hint_and_extra_are_optional(self):
        resp = error_response(
            "VALIDATION_ERROR",
            "Invalid value",
            hint="Use digits only",
            extra={"field": "zipcode"},
        )
        payload = resp.data["error"]
        self.assertEqual(payload["hint"], "Use digits only")
        self.assertEqual(payload["extra"], {"field": "zipcode"})
        self.assertNotIn("details", payload)

    def test_blank_message_is_rejected(self):
        with self.assertRaises(ValueError):
            error_response("NOT_FOUND", "   ")
