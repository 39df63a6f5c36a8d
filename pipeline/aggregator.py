"""
Result Aggregation
Single consumer that drains discovery events, keeps the running statistics,
streams each line to the operator and writes the final output.
"""

import queue
import sys
import threading
from dataclasses import dataclass

from logger import logger
from pipeline.events import AsnData
from pipeline.summary import format_line, format_summary


@dataclass
class OutputParams:
    """Display options plus the channels shared with the main flow."""
    results: queue.Queue
    finish: object
    done: object
    verbose: bool = False
    sources: bool = False
    print_ips: bool = False
    file_out: str = ''
    stream: object = None
    poll_interval: float = 0.1


def update_data(event, tags, asns):
    """
    Fold one event into the source tally and the ASN registry.

    The ISP name recorded for an ASN is the one seen first.
    """
    tags[event.source] = tags.get(event.source, 0) + 1

    data = asns.get(event.asn)
    if data is None:
        data = AsnData(name=event.isp)
        asns[event.asn] = data

    data.netblocks[event.netblock] = data.netblocks.get(event.netblock, 0) + 1


class ResultAggregator:
    """
    Owns all aggregate statistics. Only the thread running run() mutates them,
    so no locking is needed.
    """

    def __init__(self, params):
        self.params = params
        self.total = 0
        self.tags = {}
        self.asns = {}
        self.lines = []
        self._started = False
        self._streaming = True

    @property
    def output(self):
        """Everything printed so far, in arrival order."""
        return "".join(self.lines)

    def process(self, event):
        self.total += 1
        update_data(event, self.tags, self.asns)

        line = format_line(event, sources=self.params.sources, print_ips=self.params.print_ips)
        self.lines.append(line)

        self._write(line)

    def _write(self, text):
        if not self._streaming:
            return

        stream = self.params.stream or sys.stdout
        try:
            stream.write(text)
            stream.flush()
        except (OSError, ValueError) as e:
            # Results are still counted and saved; only the live display stops
            logger.error("Output stream failed, no longer printing results: %s", e)
            self._streaming = False

    def _drain(self):
        # Sole consumer: at least this many events are guaranteed to be queued
        pending = self.params.results.qsize()
        for _ in range(pending):
            try:
                event = self.params.results.get_nowait()
            except queue.Empty:
                break
            self.process(event)

        if pending:
            logger.debug("Drained %d queued results after finish", pending)

    def run(self):
        """Consume results until finish fires, then report, write and signal done."""
        if self._started:
            raise RuntimeError("result aggregator can only run once")
        self._started = True

        params = self.params
        try:
            while not params.finish.is_set():
                try:
                    event = params.results.get(timeout=params.poll_interval)
                except queue.Empty:
                    continue
                self.process(event)

            self._drain()

            if params.verbose:
                self._write(format_summary(self.total, self.tags, self.asns))

            if params.file_out:
                self.write_file(params.file_out)
        finally:
            if not params.done.fire():
                raise RuntimeError("done was already signalled")

    def write_file(self, path):
        """Overwrite path with the accumulated output. Failures are logged only."""
        try:
            with open(path, 'w') as f:
                f.write(self.output)
        except OSError as e:
            logger.error("Failed to write results to %s: %s", path, e)
            return False

        logger.debug("Saved %d names to %s", self.total, path)
        return True

    def start(self):
        """Run the consumer loop on a background thread."""
        thread = threading.Thread(target=self.run, name="output", daemon=True)
        thread.start()
        return thread
