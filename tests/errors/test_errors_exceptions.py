import unittest

from plansync.errors.exceptions import (
    AuthError,
    BadRequestError,
    ConflictError,
    HttpErrorInfo,
    NotFoundError,
    PlanSyncError,
    RateLimitError,
    RemoteOperationError,
    ServerError,
    map_http_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = PlanSyncError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_map_http_error_basic(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=404, message="not found"))
        self.assertIsInstance(err, NotFoundError)

        err = map_http_error(HttpErrorInfo(status_code=400, message="bad req"))
        self.assertIsInstance(err, BadRequestError)

        err = map_http_error(HttpErrorInfo(status_code=422, message="unprocessable"))
        self.assertIsInstance(err, BadRequestError)

        err = map_http_error(HttpErrorInfo(status_code=429, message="rate"))
        self.assertIsInstance(err, RateLimitError)

        err = map_http_error(HttpErrorInfo(status_code=409, code="23505", message="dup"))
        self.assertIsInstance(err, ConflictError)
        self.assertEqual(err.details["code"], "23505")

        err = map_http_error(HttpErrorInfo(status_code=401, message="auth"))
        self.assertIsInstance(err, AuthError)

        err = map_http_error(HttpErrorInfo(status_code=403, message="rls"))
        self.assertIsInstance(err, AuthError)

    def test_map_http_error_5xx_and_other_are_server_errors(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=503, message="unavail"))
        self.assertIsInstance(err, ServerError)

        err = map_http_error(HttpErrorInfo(status_code=418))
        self.assertIsInstance(err, ServerError)
        self.assertEqual(str(err), "HTTP error 418")

    def test_mapped_errors_are_remote_operation_errors(self) -> None:
        for status in (400, 401, 404, 409, 429, 500):
            err = map_http_error(HttpErrorInfo(status_code=status))
            self.assertIsInstance(err, RemoteOperationError)
            self.assertEqual(err.details["status_code"], status)


if __name__ == "__main__":
    unittest.main()
