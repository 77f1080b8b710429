"""Coordinate how and when the launcher process ends.

Background work that must finish before the launcher exits (for example a
thread waiting on the game process) is registered with ``ExitManager.track``.
When the main flow ends cleanly, ``on_end`` waits for every tracked task and
only then calls the end hook. When it ends with an exception the wait is
skipped. ``terminate`` is the single place that actually stops the process and
can be swapped out, which lets tests intercept it.
"""

import logging
import sys
import threading
from collections.abc import Callable
from typing import Any, Protocol

log = logging.getLogger(__name__)


class TaskHandle(Protocol):
    """Anything that can be waited on; ``threading.Thread`` qualifies."""

    def join(self, timeout: float | None = None) -> None: ...

    def is_alive(self) -> bool: ...


class Terminator(Protocol):
    def terminate(self, code: int) -> None: ...


class EndHook(Protocol):
    def on_end(self, failure: BaseException | None) -> None: ...


class SystemExitTerminator:
    """Stop the process by raising SystemExit with the exit code."""

    def terminate(self, code: int) -> None:
        sys.exit(code)


class NoOpEndHook:
    def on_end(self, failure: BaseException | None) -> None:
        return None


class _CallableTerminator:
    def __init__(self, func: Callable[[int], Any]) -> None:
        self._func = func

    def terminate(self, code: int) -> None:
        self._func(code)


class _CallableEndHook:
    def __init__(self, func: Callable[[BaseException | None], Any]) -> None:
        self._func = func

    def on_end(self, failure: BaseException | None) -> None:
        self._func(failure)


class ExitManager:
    """Tracks task threads and owns the launcher's exit code."""

    def __init__(
        self,
        terminator: Terminator | Callable[[int], Any] | None = None,
        end_hook: EndHook | Callable[[BaseException | None], Any] | None = None,
    ) -> None:
        if terminator is None:
            terminator = SystemExitTerminator()
        elif not hasattr(terminator, "terminate"):
            terminator = _CallableTerminator(terminator)
        if end_hook is None:
            end_hook = NoOpEndHook()
        elif not hasattr(end_hook, "on_end"):
            end_hook = _CallableEndHook(end_hook)
        self.terminator: Terminator = terminator
        self.end_hook: EndHook = end_hook
        self._tasks: set[TaskHandle] = set()
        self._tasks_lock = threading.Lock()
        self._exit_code: int | None = None
        self._exit_lock = threading.Lock()

    @property
    def exit_code(self) -> int | None:
        """The code of the latest ``terminate`` call, or None."""
        with self._exit_lock:
            return self._exit_code

    def pending_tasks(self) -> list[TaskHandle]:
        with self._tasks_lock:
            return [task for task in self._tasks if task.is_alive()]

    def track(self, task: TaskHandle) -> None:
        """Keep the launcher alive until the started ``task`` finishes (on a clean end)."""
        with self._tasks_lock:
            self._sweep_locked()
            self._tasks.add(task)
        log.debug("tracking task %r", task)

    def complete(self, task: TaskHandle) -> None:
        """Forget ``task``; called from its own completion path."""
        with self._tasks_lock:
            self._tasks.discard(task)

    def spawn(
        self, target: Callable[..., Any], *args: Any, name: str | None = None
    ) -> "TrackedThread":
        """Start ``target`` on a tracked thread and return it."""
        thread = TrackedThread(self, target=target, args=args, name=name)
        thread.start()
        self.track(thread)
        return thread

    def terminate(self, code: int) -> None:
        """Record ``code`` and hand it to the terminator."""
        with self._exit_lock:
            self._exit_code = code
        log.debug("terminating with exit code %d", code)
        self.terminator.terminate(code)

    def on_end(self, failure: BaseException | None = None) -> None:
        """Call once when the main flow is over, with the exception that ended it."""
        if failure is None:
            self._wait_for_tasks()
        else:
            log.debug("main flow failed (%s), not waiting for tasks", type(failure).__name__)
        self.end_hook.on_end(failure)

    def _sweep_locked(self) -> None:
        finished = [task for task in self._tasks if not task.is_alive()]
        for task in finished:
            self._tasks.discard(task)

    def _wait_for_tasks(self) -> None:
        with self._tasks_lock:
            self._sweep_locked()
            snapshot = list(self._tasks)
        if snapshot:
            log.debug("waiting for %d task(s)", len(snapshot))
        for task in snapshot:
            try:
                task.join()
            except KeyboardInterrupt:
                # Ctrl-C abandons the remaining joins; tracked threads are daemons.
                log.debug("interrupted while waiting for tasks")
                return


class TrackedThread(threading.Thread):
    """A thread that removes itself from its ExitManager when it finishes."""

    def __init__(self, manager: ExitManager, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("daemon", True)
        super().__init__(*args, **kwargs)
        self._manager = manager

    def run(self) -> None:
        try:
            super().run()
        finally:
            self._manager.complete(self)
