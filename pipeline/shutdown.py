"""
Shutdown Coordination
Makes sure engine completion and operator interrupts agree on one
finish-and-flush sequence, and that the process never exits mid-flush.
"""

import os
import signal
import sys
import threading

from logger import logger


class OneShot:
    """A signal that fires at most once. Later fire() calls change nothing."""

    def __init__(self, name):
        self.name = name
        self._event = threading.Event()
        self._lock = threading.Lock()

    def fire(self):
        """Fire the signal. Returns True only for the call that fired it."""
        # A caller that finds the lock held loses, including a signal handler
        # that interrupted the holder on the same thread; the holder fires it.
        if not self._lock.acquire(blocking=False):
            return False
        try:
            if self._event.is_set():
                return False
            self._event.set()
            return True
        finally:
            self._lock.release()

    def is_set(self):
        return self._event.is_set()

    def wait(self, timeout=None):
        return self._event.wait(timeout)

    def __repr__(self):
        state = "fired" if self.is_set() else "pending"
        return f"<OneShot {self.name} {state}>"


class ShutdownCoordinator:
    """
    Drives the finish/done handshake for one run.

    Two triggers compete for the finish signal: the engine's run() returning
    and SIGINT/SIGTERM. Whichever arrives first fires it; the other is a no-op.
    """

    def __init__(self, finish, done, exit_func=os._exit, poll_interval=0.5):
        self.finish = finish
        self.done = done
        self.reason = None
        self._exit = exit_func
        self._poll_interval = poll_interval
        self._previous = {}

    def request_finish(self, reason):
        """
        Ask the output pipeline to finish.

        Args:
            reason: "complete" or "interrupt"

        Returns:
            True if this call fired the finish signal, False if another
            trigger already did
        """
        if not self.finish.fire():
            logger.debug("Finish already requested (%s), ignoring %s", self.reason, reason)
            return False
        self.reason = reason
        logger.debug("Finish requested: %s", reason)
        return True

    def wait_done(self):
        """Block until the output pipeline has flushed."""
        # Short waits keep the main thread responsive to signals
        while not self.done.wait(self._poll_interval):
            pass

    def engine_finished(self):
        """Called by the main flow once the engine's run() has returned."""
        self.request_finish("complete")
        self.wait_done()

    def handle_signal(self, signum, frame):
        if not self.request_finish("interrupt"):
            logger.warning("Shutdown already in progress, waiting for output to flush")
            return

        logger.info("Interrupted, writing final output...")
        self.wait_done()

        sys.stdout.flush()
        sys.stderr.flush()
        # Output is already flushed; skip the normal-path cleanup
        self._exit(0)

    def install(self, signals=(signal.SIGINT, signal.SIGTERM)):
        """Route the given signals to handle_signal. Main thread only."""
        for signum in signals:
            self._previous[signum] = signal.signal(signum, self.handle_signal)

    def uninstall(self):
        """Restore the handlers that were active before install()."""
        for signum, previous in self._previous.items():
            signal.signal(signum, previous)
        self._previous.clear()
