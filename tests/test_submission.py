from __future__ import annotations

import unittest
from unittest import mock

import requests

from obsportal.models.schemas import Option, Teacher
from obsportal.services.api_client import ApiClient
from obsportal.services.dropdowns import DataCache, preload_dropdowns
from obsportal.services.submission import (
    SubmissionBlocked,
    build_payload,
    submit_observation,
    validate_payload,
)
from tests.fakes import BASE_URL, FakeBackend, make_backend_with_lists

FORM = {
    "Observation_Teacher": "7",
    "Observation_Department": "2",
    "Observation_Focus": "5",
    "Observation_Class": " 10A ",
    "Observation_Strengths": "Good pace ",
    "Observation_Weaknesses": "",
    "Observation_Comments": None,
}

CACHE = DataCache(
    teachers=[Teacher(id=7, name="Silva, Ana")],
    departments=[Option(id=2, name="Science")],
    focus=[Option(id=5, name="Questioning")],
)


class TestPayload(unittest.TestCase):
    def test_build_payload(self) -> None:
        payload = build_payload(FORM, CACHE.departments, CACHE.focus)
        self.assertEqual(payload, {
            "Observation_Teacher": 7,
            "Observation_Department": 2,
            "Observation_Focus": 5,
            "Observation_Class": "10A",
            "Observation_Strengths": "Good pace",
            "Observation_Weaknesses": "",
            "Observation_Comments": "",
        })

    def test_empty_lists_null_out_ids(self) -> None:
        payload = build_payload(FORM, [], CACHE.focus)
        self.assertIsNone(payload["Observation_Department"])
        with self.assertRaises(SubmissionBlocked):
            validate_payload(payload)

    def test_non_numeric_focus_is_blocked(self) -> None:
        payload = build_payload(dict(FORM, Observation_Focus="none"), CACHE.departments, CACHE.focus)
        with self.assertRaises(SubmissionBlocked):
            validate_payload(payload)

    def test_oversized_department_is_blocked(self) -> None:
        payload = build_payload(dict(FORM, Observation_Department="9" * 5000), CACHE.departments, CACHE.focus)
        self.assertIsNone(payload["Observation_Department"])
        with self.assertRaises(SubmissionBlocked):
            validate_payload(payload)

    def test_non_ascii_digits_are_blocked(self) -> None:
        payload = build_payload(dict(FORM, Observation_Focus="\u0662"), CACHE.departments, CACHE.focus)
        self.assertIsNone(payload["Observation_Focus"])
        with self.assertRaises(SubmissionBlocked):
            validate_payload(payload)


class TestSubmitObservation(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = FakeBackend()
        self.api = ApiClient(base_url=BASE_URL, session=self.backend)

    def test_missing_department_never_posts(self) -> None:
        outcome = submit_observation(self.api, dict(FORM, Observation_Department=""), CACHE)
        self.assertIn("alert-warning", outcome.flash_html)
        self.assertIn("Department/Focus missing", outcome.flash_html)
        self.assertTrue(outcome.show_form)
        self.assertEqual(self.backend.calls_to("POST", "/api/new"), [])

    def test_oversized_department_warns_without_posting(self) -> None:
        outcome = submit_observation(self.api, dict(FORM, Observation_Department="9" * 5000), CACHE)
        self.assertIn("Department/Focus missing", outcome.flash_html)
        self.assertTrue(outcome.show_form)
        self.assertEqual(self.backend.calls, [])

    def test_unexpected_error_becomes_danger_banner(self) -> None:
        with mock.patch(
            "obsportal.services.submission.create_observation",
            side_effect=KeyError("Observation_ID"),
        ):
            with self.assertLogs("obsportal.submission", level="ERROR"):
                outcome = submit_observation(self.api, FORM, CACHE)

        self.assertIn("alert-danger", outcome.flash_html)
        self.assertIn("Unexpected error.", outcome.flash_html)
        self.assertTrue(outcome.show_form)
        self.assertIsNone(outcome.redirect_to)
        self.assertIsNone(outcome.created_id)

    def test_missing_lists_never_post(self) -> None:
        outcome = submit_observation(self.api, FORM, DataCache(teachers=CACHE.teachers))
        self.assertIn("Submit is disabled", outcome.flash_html)
        self.assertEqual(self.backend.calls, [])

    def test_create_without_email(self) -> None:
        self.backend.on("POST", "/api/new", status=201, data={"Observation_ID": 41})
        outcome = submit_observation(self.api, FORM, CACHE)

        self.assertEqual(outcome.created_id, 41)
        self.assertEqual(outcome.redirect_to, "/")
        self.assertFalse(outcome.show_form)
        self.assertIn("Observation created.", outcome.flash_html)
        self.assertEqual(len(self.backend.calls), 1)
        self.assertEqual(self.backend.calls[0]["json"]["Observation_Department"], 2)

    def test_create_with_email_calls_email_once(self) -> None:
        self.backend.on("POST", "/api/new", status=201, data={"id": 42})
        self.backend.on("POST", "/api/observations/42/email?notify=true", data={"message": "queued"})

        outcome = submit_observation(self.api, dict(FORM, sendEmail="on"), CACHE)

        self.assertEqual(len(self.backend.calls_to("POST", "/api/observations/42/email?notify=true")), 1)
        self.assertTrue(outcome.email_sent)
        self.assertIn("email sent", outcome.flash_html)

    def test_email_failure_still_counts_as_created(self) -> None:
        self.backend.on("POST", "/api/new", status=201, data={"observation_id": 43})
        self.backend.on("POST", "/api/observations/43/email?notify=true", status=502, data={"detail": "smtp down"})

        outcome = submit_observation(self.api, dict(FORM, sendEmail="on"), CACHE)

        self.assertFalse(outcome.email_sent)
        self.assertEqual(outcome.redirect_to, "/")
        self.assertIn("Email failed (smtp down)", outcome.flash_html)

    def test_email_skipped_without_new_id(self) -> None:
        self.backend.on("POST", "/api/new", status=201, data={"message": "ok"})
        outcome = submit_observation(self.api, dict(FORM, sendEmail="on"), CACHE)

        self.assertEqual(len(self.backend.calls), 1)
        self.assertIn("Observation created.", outcome.flash_html)

    def test_create_failure_messages(self) -> None:
        self.backend.on("POST", "/api/new", status=400, data={"detail": "bad class"})
        outcome = submit_observation(self.api, FORM, CACHE)
        self.assertIn("Create failed (bad class)", outcome.flash_html)
        self.assertTrue(outcome.show_form)
        self.assertIsNone(outcome.redirect_to)

        self.backend.on("POST", "/api/new", status=500, data=None)
        outcome = submit_observation(self.api, FORM, CACHE)
        self.assertIn("Create failed (500)", outcome.flash_html)

        self.backend.fail("POST", "/api/new", requests.ConnectionError("refused"))
        outcome = submit_observation(self.api, FORM, CACHE)
        self.assertIn("Create failed (refused)", outcome.flash_html)


class TestPreloadDropdowns(unittest.TestCase):
    def test_all_lists_loaded(self) -> None:
        api = ApiClient(base_url=BASE_URL, session=make_backend_with_lists())
        cache = preload_dropdowns(api)
        self.assertEqual([t.name for t in cache.teachers], ["Silva, Ana"])
        self.assertEqual([d.id for d in cache.departments], [2])
        self.assertEqual([f.id for f in cache.focus], [5])
        self.assertFalse(cache.missing_required)

    def test_one_failed_list_leaves_the_others(self) -> None:
        backend = make_backend_with_lists()
        backend.on("GET", "/api/focus_areas", status=503, data={"detail": "down"})
        cache = preload_dropdowns(ApiClient(base_url=BASE_URL, session=backend))
        self.assertEqual(len(cache.teachers), 1)
        self.assertEqual(cache.focus, [])
        self.assertTrue(cache.missing_required)


if __name__ == "__main__":
    unittest.main()
