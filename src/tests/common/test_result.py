import unittest

from common.errors import BuildFailed, CannotReadFile
from common.result import BlogResult, ContextError


class TestBlogResult(unittest.TestCase):
    """Test cases for the accumulating result type."""

    def test_ok(self):
        result = BlogResult().ok(42)
        self.assertTrue(result.is_ok)
        self.assertEqual(result.unwrap(), 42)

    def test_err_makes_result_fail(self):
        result = BlogResult().err(CannotReadFile("a.txt"))
        self.assertFalse(result.is_ok)
        with self.assertRaises(BuildFailed) as ctx:
            result.unwrap()
        self.assertEqual(str(ctx.exception), "1 error found")

    def test_ok_after_err_stays_failed(self):
        result = BlogResult().err(ValueError("bad")).ok("value")
        self.assertFalse(result.is_ok)
        self.assertEqual(result.value, "value")

    def test_errs_and_merge_accumulate(self):
        first = BlogResult().errs([ValueError("a"), ValueError("b")])
        second = BlogResult().err(ValueError("c"))
        first.merge(second)
        self.assertEqual([str(e) for e in first.errors], ["a", "b", "c"])
        with self.assertRaises(BuildFailed) as ctx:
            first.unwrap()
        self.assertEqual(str(ctx.exception), "3 errors found")
        self.assertEqual(len(ctx.exception.errors), 3)

    def test_err_context(self):
        result = BlogResult().err_context(OSError("disk full"), "while writing index.html")
        error = result.errors[0]
        self.assertIsInstance(error, ContextError)
        self.assertEqual(str(error), "while writing index.html: disk full")

    def test_repr(self):
        self.assertEqual(repr(BlogResult().ok(1)), "BlogResult(ok=1)")
        self.assertEqual(repr(BlogResult().err(ValueError("x"))), "BlogResult(errors=['x'])")


if __name__ == '__main__':
    unittest.main()
