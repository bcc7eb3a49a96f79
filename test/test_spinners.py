"""
Spinner behavioral tests.

Scope
- Validate the glyph loop, the label and the final clear.
- Validate that handles are independent.
- Validate start/stop misuse errors.

Conventions
- Test method names follow CamelCase per project convention.
- Spinners draw on in-memory consoles with a short tick.
"""

from __future__ import annotations

import time
import unittest
from unittest import TestCase

from support import frames, stdout, terminal

from clapp import GLYPHS, AnimationStateError, Spinner

TICK = 0.01


class TestSpinner(TestCase):
    """Behavioral tests for one spinner handle."""

    def testDrawsGlyphsAndLabel(self):
        output = terminal()
        spinner = Spinner("loading", terminal=output, interval=TICK).start()
        time.sleep(0.1)
        spinner.stop()

        drawn = frames(output)
        self.assertGreater(len(drawn), 1)
        self.assertEqual(drawn[0], "%s loading" % GLYPHS[0])
        self.assertEqual(drawn[1], "%s loading" % GLYPHS[1])

    def testClearsLineOnStop(self):
        output = terminal()
        spinner = Spinner("loading", terminal=output, interval=TICK).start()
        spinner.stop()
        self.assertTrue(stdout(output).endswith("\r" + " " * (len("loading") + 4) + "\r"))

    def testWithoutLabel(self):
        output = terminal()
        spinner = Spinner(terminal=output, interval=TICK).start()
        time.sleep(0.03)
        spinner.stop()
        self.assertTrue(all(frame in GLYPHS for frame in frames(output)))

    def testCustomGlyphs(self):
        output = terminal()
        spinner = Spinner("x", terminal=output, glyphs="ab", interval=TICK).start()
        time.sleep(0.05)
        spinner.stop()
        self.assertEqual(frames(output)[:3], ["a x", "b x", "a x"])

    def testRunningFlag(self):
        spinner = Spinner("x", terminal=terminal(), interval=TICK)
        self.assertFalse(spinner.running)
        spinner.start()
        self.assertTrue(spinner.running)
        spinner.stop()
        self.assertFalse(spinner.running)

    def testStopWithoutStart(self):
        with self.assertRaises(AnimationStateError):
            Spinner("x", terminal=terminal()).stop()

    def testDoubleStop(self):
        spinner = Spinner("x", terminal=terminal(), interval=TICK).start()
        spinner.stop()
        with self.assertRaises(AnimationStateError):
            spinner.stop()

    def testDoubleStart(self):
        spinner = Spinner("x", terminal=terminal(), interval=TICK).start()
        try:
            with self.assertRaises(AnimationStateError):
                spinner.start()
        finally:
            spinner.stop()

    def testContextManager(self):
        with Spinner("x", terminal=terminal(), interval=TICK) as spinner:
            self.assertTrue(spinner.running)
        self.assertFalse(spinner.running)

    def testRejectsEmptyGlyphs(self):
        with self.assertRaises(ValueError):
            Spinner("x", glyphs=())


class TestIndependentSpinners(TestCase):
    """Behavioral tests for several live handles."""

    def testHandlesStopIndependently(self):
        first = Spinner("first", terminal=terminal(), interval=TICK).start()
        second = Spinner("second", terminal=terminal(), interval=TICK).start()

        first.stop()
        self.assertFalse(first.running)
        self.assertTrue(second.running)
        self.assertTrue(second._thread.is_alive())

        second.stop()
        self.assertFalse(second._thread.is_alive())


if __name__ == "__main__":
    unittest.main()
