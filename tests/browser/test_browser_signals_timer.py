import asyncio
import unittest

from fake_store import FakeScheduler

from drivenav.browser import CancellableTimer, MessageChannel, RequestGeneration


class TestCancellableTimer(unittest.TestCase):
    def test_fires_once_after_delay(self) -> None:
        clock = FakeScheduler()
        timer = CancellableTimer(clock)
        fired: list[float] = []

        timer.start(0.4, lambda: fired.append(clock.now))
        self.assertTrue(timer.pending)
        clock.advance_to(0.39)
        self.assertEqual(fired, [])
        clock.advance_to(2.0)

        self.assertEqual(fired, [0.4])
        self.assertFalse(timer.pending)

    def test_restart_cancels_previous_callback(self) -> None:
        clock = FakeScheduler()
        timer = CancellableTimer(clock)
        fired: list[str] = []

        timer.start(0.4, lambda: fired.append("first"))
        clock.advance_to(0.3)
        timer.start(0.4, lambda: fired.append("second"))
        clock.advance_to(1.0)

        self.assertEqual(fired, ["second"])

    def test_cancel(self) -> None:
        clock = FakeScheduler()
        timer = CancellableTimer(clock)
        fired: list[str] = []

        timer.start(0.1, lambda: fired.append("x"))
        timer.cancel()
        timer.cancel()
        clock.advance_to(1.0)

        self.assertEqual(fired, [])
        self.assertFalse(timer.pending)


class TestCancellableTimerOnLoop(unittest.IsolatedAsyncioTestCase):
    async def test_defaults_to_running_loop(self) -> None:
        timer = CancellableTimer()
        done = asyncio.Event()

        timer.start(0.01, done.set)
        await asyncio.wait_for(done.wait(), timeout=1.0)

        self.assertFalse(timer.pending)


class TestMessageChannel(unittest.TestCase):
    def test_post_delivers_to_active_subscriptions(self) -> None:
        channel = MessageChannel()
        got: list[object] = []
        sub = channel.subscribe(got.append)

        channel.post("a")
        sub.cancel()
        channel.post("b")

        self.assertEqual(got, ["a"])
        self.assertFalse(sub.active)
        self.assertEqual(channel.listener_count, 0)

    def test_cancel_is_idempotent(self) -> None:
        channel = MessageChannel()
        sub = channel.subscribe(lambda payload: None)

        sub.cancel()
        sub.cancel()

        self.assertEqual(channel.listener_count, 0)

    def test_handler_may_cancel_itself_during_delivery(self) -> None:
        channel = MessageChannel()
        got: list[str] = []
        subs = []

        def once(payload: object) -> None:
            got.append("once")
            subs[0].cancel()

        subs.append(channel.subscribe(once))
        channel.subscribe(lambda payload: got.append("always"))

        channel.post("x")
        channel.post("y")

        self.assertEqual(got, ["once", "always", "always"])


class TestRequestGeneration(unittest.TestCase):
    def test_only_latest_token_is_current(self) -> None:
        gen = RequestGeneration()

        first = gen.issue()
        second = gen.issue()

        self.assertFalse(gen.is_current(first))
        self.assertTrue(gen.is_current(second))

    def test_invalidate_makes_outstanding_tokens_stale(self) -> None:
        gen = RequestGeneration()
        token = gen.issue()

        gen.invalidate()

        self.assertFalse(gen.is_current(token))


if __name__ == "__main__":
    unittest.main()
