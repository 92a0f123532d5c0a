"""
Row source: the template-driven tokenizer run as a small thread pipeline.

Stages hand items to each other through single-slot channels:

    template file --> template channel --+
                                         +--> tokenizer --> row channel --> consumer
    command output --> output channel ---+

The tokenizer is TextFSM. Rows are published as soon as the state machine
completes them, one tuple of strings per record.
"""

import io
import queue
import threading
from typing import Any, Iterator

import textfsm


class SourceError(Exception):
    """The tokenizer or row source failed."""

    def __init__(self, message: str, family: str = "", mount: str = ""):
        self.family = family
        self.mount = mount
        super().__init__(message)


class _Closed:
    """End of stream marker, never visible to consumers."""


class _Failed:
    def __init__(self, error: BaseException):
        self.error = error


class Channel:
    """
    Single-slot handoff between two pipeline stages.

    put() blocks until the slot is free. Iterating yields items until the
    producer calls close(); if the producer calls fail() the iteration
    raises that error instead.
    """

    def __init__(self):
        self._queue: queue.Queue = queue.Queue(maxsize=1)

    def put(self, item: Any) -> None:
        self._queue.put(item)

    def close(self) -> None:
        self._queue.put(_Closed)

    def fail(self, error: BaseException) -> None:
        self._queue.put(_Failed(error))

    def __iter__(self) -> Iterator[Any]:
        while True:
            item = self._queue.get()
            if item is _Closed:
                return
            if isinstance(item, _Failed):
                raise item.error
            yield item


def feed_template(template_path: str, channel: Channel) -> None:
    """Publish template lines, keeping line endings."""
    try:
        with open(template_path) as f:
            for line in f:
                channel.put(line)
    except (OSError, ValueError) as e:
        channel.fail(e)
        return
    channel.close()


def feed_output(output: str, channel: Channel) -> None:
    """Publish command output lines."""
    for line in output.splitlines():
        channel.put(line)
    channel.close()


def tokenize(template: Channel, source: Channel, rows: Channel) -> None:
    """
    Build the TextFSM machine from the template channel and publish rows
    for the lines arriving on the source channel.

    Any failure is forwarded to the row channel after the source channel
    has been drained, so the feeder stages always finish.
    """
    published = 0
    try:
        fsm = textfsm.TextFSM(io.StringIO("".join(template)))
        for line in source:
            result = fsm.ParseText(line, eof=False)
            while published < len(result):
                rows.put(tuple(result[published]))
                published += 1
        result = fsm.ParseText("", eof=True)
    except Exception as e:
        for _ in source:
            pass
        rows.fail(e)
        return

    while published < len(result):
        rows.put(tuple(result[published]))
        published += 1
    rows.close()


class RowSource:
    """
    Context manager producing tokenized rows from command output.

    Usage:
        with RowSource(template_path, output, family="device_stats", mount="/") as rows:
            for row in rows:
                ...

    Leaving the block before the rows are exhausted drains the remainder so
    the stage threads finish.
    """

    def __init__(self, template_path: str, output: str, family: str = "", mount: str = ""):
        self.template_path = str(template_path)
        self.output = output
        self.family = family
        self.mount = mount
        self._rows = Channel()
        self._threads: list[threading.Thread] = []
        self._exhausted = False

    def __enter__(self) -> Iterator[tuple[str, ...]]:
        template = Channel()
        source = Channel()
        self._threads = [
            threading.Thread(
                target=feed_template, args=(self.template_path, template), daemon=True
            ),
            threading.Thread(target=feed_output, args=(self.output, source), daemon=True),
            threading.Thread(target=tokenize, args=(template, source, self._rows), daemon=True),
        ]
        for thread in self._threads:
            thread.start()
        return self._iter_rows()

    def _iter_rows(self) -> Iterator[tuple[str, ...]]:
        try:
            yield from self._rows
        except Exception as e:
            self._exhausted = True
            raise SourceError(
                f"{self.family} tokenizer failed for {self.mount}: {e}",
                family=self.family,
                mount=self.mount,
            ) from e
        self._exhausted = True

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if not self._exhausted:
            self._exhausted = True
            try:
                for _ in self._rows:
                    pass
            except Exception:
                # The consumer stopped early; a late tokenizer failure has
                # nobody left to report to.
                pass
        for thread in self._threads:
            thread.join()
