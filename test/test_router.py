"""
Router behavioral tests.

Scope
- Validate lockstep matching, count mismatches and capture binding.
- Validate registration order as the only tie-breaker.
- Validate the NotFound outcome and the usage listing.

Conventions
- Test method names follow CamelCase per project convention.
- Handlers are plain callables; only identity matters here.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from clapp import NotFound, NotFoundType, Route, Router, compile_pattern, handler_matches


def first(context):
    pass


def second(context):
    pass


class TestHandlerMatches(TestCase):
    """Behavioral tests for handler_matches."""

    def testCountMismatchFails(self):
        self.assertIsNone(handler_matches(compile_pattern("build [target]"), ["prog", "build"]))
        self.assertIsNone(handler_matches(compile_pattern("build"), ["prog", "build", "all"]))

    def testFlagsAreNotCounted(self):
        words = compile_pattern("build [target]")
        self.assertEqual(handler_matches(words, ["prog", "-v", "build", "--fast", "all"]), {"target": "all"})

    def testProgramNameIsDropped(self):
        self.assertIsNone(handler_matches(compile_pattern("prog"), ["prog"]))

    def testEmptyPatternMatchesBareInvocation(self):
        self.assertEqual(handler_matches(compile_pattern(""), ["prog"]), {})

    def testTypedCapture(self):
        words = compile_pattern(r"n:^\d+$")
        self.assertEqual(handler_matches(words, ["prog", "42"]), {"n": "42"})
        self.assertIsNone(handler_matches(words, ["prog", "abc"]))

    def testMultiWordCaptureBindsUnderscoredName(self):
        words = compile_pattern("greet [full name]")
        self.assertEqual(handler_matches(words, ["prog", "greet", "ada"]), {"full_name": "ada"})


class TestRouter(TestCase):
    """Behavioral tests for Router.dispatch and introspection."""

    def testFirstRegistrationWins(self):
        router = Router([("build [target]", first), ("build all", second)])
        dispatch = router.dispatch(["prog", "build", "all"])
        self.assertIs(dispatch.handler, first)
        self.assertEqual(dispatch.captures, {"target": "all"})

    def testSpecificRouteFirst(self):
        router = Router([("build all", second), ("build [target]", first)])
        self.assertIs(router.dispatch(["prog", "build", "all"]).handler, second)
        self.assertIs(router.dispatch(["prog", "build", "docs"]).handler, first)

    def testDispatchCarriesRoute(self):
        router = Router([(r"add n:^\d+$", first, "add a number")])
        dispatch = router.dispatch(["prog", "add", "7"])
        self.assertEqual(dispatch.route.pattern, r"add n:^\d+$")
        self.assertEqual(dispatch.captures, {"n": "7"})

    def testNotFound(self):
        router = Router([("build", first)])
        result = router.dispatch(["prog", "deploy"])
        self.assertIs(result, NotFound)
        self.assertFalse(result)
        self.assertEqual(repr(result), "NotFound")

    def testNotFoundIsSingleton(self):
        self.assertIs(NotFoundType(), NotFound)
        with self.assertRaises(TypeError):
            type("Other", (NotFoundType,), {})

    def testEmptyRouter(self):
        self.assertIs(Router().dispatch(["prog"]), NotFound)
        self.assertEqual(len(Router()), 0)

    def testRoutesAreImmutable(self):
        router = Router([("build", first)])
        self.assertIsInstance(router.routes, tuple)
        with self.assertRaises(AttributeError):
            router.routes = ()

    def testAcceptsRoutes(self):
        route = Route.build("build", first, "build it")
        router = Router([route])
        self.assertIs(router.routes[0], route)

    def testRejectsNonCallableHandler(self):
        with self.assertRaises(TypeError):
            Router([("build", "not callable")])

    def testCommandsListOnlyDescribedRoutes(self):
        router = Router([
            (r"add n:^\d+$", first, "add a number"),
            ("hidden", second),
            ("greet [full name]", second, ""),
        ])
        self.assertEqual(router.commands, (("add {n}", "add a number"), ("greet [full_name]", "")))

    def testDuplicatesAreKept(self):
        router = Router([("build", first), ("build", second)])
        self.assertEqual(len(router), 2)
        self.assertIs(router.dispatch(["prog", "build"]).handler, first)


if __name__ == "__main__":
    unittest.main()
