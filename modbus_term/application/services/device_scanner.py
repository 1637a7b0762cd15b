"""Device scanner service.

Probes a range of bus addresses one after another to find which slave
ids answer. Only one physical half-duplex line is assumed, so probes are
strictly sequential.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from ...const import (
    DEFAULT_PROBE_ADDRESS,
    DEFAULT_PROBE_TIMEOUT,
    MAX_SLAVE_ID,
    MIN_SLAVE_ID,
)
from ...domain.exceptions import (
    ProtocolException,
    ProtocolTimeout,
    ScanInProgressError,
    TransportFailure,
)
from ...domain.helpers.validators import validate_slave_id
from ...domain.interfaces import IModbusTransport
from ...domain.value_objects import DeviceScanResult, ScanStatus, ScanSummary
from ...infrastructure.dispatch import Dispatcher
from ...infrastructure.state_machines import ScanEvent, ScanState, ScanStateMachine
from .communication_log import CommunicationLog

_LOGGER = logging.getLogger(__name__)

ResultListener = Callable[[DeviceScanResult], None]
SummaryListener = Callable[[ScanSummary], None]


class DeviceScanner:
    """Sequential, cancellable scan for responsive slave ids.

    Each probe is a one-register read with a bounded timeout and is
    classified as SUCCESS (valid reply), EXCEPTION (Modbus exception
    reply) or TIMEOUT. Every classification is published as soon as it is
    known. Cancellation is checked between probes only, so a probe in
    flight always completes.

    Results and the summary are delivered through the dispatcher, which
    is also where they are appended to ``results``.

    Example:
        >>> scanner = DeviceScanner(transport, dispatcher)
        >>> scanner.add_result_listener(lambda r: print(r))
        >>> summary = await scanner.scan()
        >>> str(summary)
        'Scan complete: 1 device(s) responded successfully, 0 with exceptions, 246 timed out'
    """

    def __init__(
        self,
        transport: IModbusTransport,
        dispatcher: Optional[Dispatcher] = None,
        first_slave_id: int = MIN_SLAVE_ID,
        last_slave_id: int = MAX_SLAVE_ID,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        probe_address: int = DEFAULT_PROBE_ADDRESS,
        communication_log: Optional[CommunicationLog] = None,
    ):
        """Initialize scanner.

        Args:
            transport: Shared bus transport
            dispatcher: Dispatch thread for results (default: inline)
            first_slave_id: First id probed
            last_slave_id: Last id probed (inclusive)
            probe_timeout: Seconds to wait for each probe reply
            probe_address: Holding register read by each probe
            communication_log: Optional log for scan notices

        Raises:
            ValidationError: If the id range is invalid
        """
        validate_slave_id(first_slave_id, "first_slave_id")
        validate_slave_id(last_slave_id, "last_slave_id")
        if first_slave_id > last_slave_id:
            raise ValueError(
                f"Invalid scan range: {first_slave_id} > {last_slave_id}"
            )

        self._transport = transport
        self._dispatcher = dispatcher
        self._first_slave_id = first_slave_id
        self._last_slave_id = last_slave_id
        self._probe_timeout = probe_timeout
        self._probe_address = probe_address
        self._log = communication_log

        self._state_machine = ScanStateMachine()
        self._cancel_event = asyncio.Event()
        self._task: Optional[asyncio.Task] = None
        self._results: List[DeviceScanResult] = []
        self._result_listeners: List[ResultListener] = []
        self._summary_listeners: List[SummaryListener] = []
        self._last_summary: Optional[ScanSummary] = None

    @property
    def state(self) -> ScanState:
        return self._state_machine.state

    @property
    def is_scanning(self) -> bool:
        """Whether a scan loop is active (including while cancelling)."""
        return self._state_machine.is_active

    @property
    def results(self) -> List[DeviceScanResult]:
        """Results of the current or last scan, in probe order."""
        return list(self._results)

    @property
    def last_summary(self) -> Optional[ScanSummary]:
        return self._last_summary

    @property
    def slave_ids(self) -> range:
        """Ids probed by a scan, in probe order."""
        return range(self._first_slave_id, self._last_slave_id + 1)

    def add_result_listener(self, listener: ResultListener) -> None:
        self._result_listeners.append(listener)

    def add_summary_listener(self, listener: SummaryListener) -> None:
        self._summary_listeners.append(listener)

    def start(self) -> "asyncio.Task[ScanSummary]":
        """Start a scan as a background task.

        Raises:
            ScanInProgressError: If a scan is already active
        """
        self._begin()
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    async def scan(self) -> ScanSummary:
        """Run a complete scan and return its summary.

        Raises:
            ScanInProgressError: If a scan is already active
            TransportFailure: If the connection is lost; the scan stops
                and its summary is still emitted
        """
        self._begin()
        return await self._run()

    def cancel(self) -> bool:
        """Request cancellation; the current probe is allowed to finish.

        Returns:
            True if a running scan will stop, False if nothing was running
        """
        if not self._state_machine.transition(ScanEvent.CANCEL):
            return False
        self._cancel_event.set()
        _LOGGER.info("Scan cancellation requested")
        return True

    def _begin(self) -> None:
        if not self._state_machine.transition(ScanEvent.START):
            raise ScanInProgressError(
                f"A device scan is already {self.state.name.lower()}"
            )
        self._cancel_event.clear()
        self._results.clear()
        self._last_summary = None

    async def _run(self) -> ScanSummary:
        completed: List[DeviceScanResult] = []
        _LOGGER.info(
            "Scanning slave ids %d-%d (probe timeout %.2fs)",
            self._first_slave_id,
            self._last_slave_id,
            self._probe_timeout,
        )
        if self._log is not None:
            self._log.info(
                f"Starting device scan for IDs {self._first_slave_id}-{self._last_slave_id}"
            )

        try:
            for slave_id in self.slave_ids:
                if self._cancel_event.is_set():
                    break
                result = await self._probe(slave_id)
                completed.append(result)
                self._dispatch(self._publish_result, result)
        except TransportFailure as err:
            _LOGGER.error("Scan stopped by transport failure: %s", err)
            if self._log is not None:
                self._log.error(f"Scan stopped: {err}")
            raise
        finally:
            summary = ScanSummary.from_results(
                completed, cancelled=self._cancel_event.is_set()
            )
            self._state_machine.transition(ScanEvent.FINISHED)
            self._dispatch(self._publish_summary, summary)
            _LOGGER.info("%s", summary)

        return summary

    async def _probe(self, slave_id: int) -> DeviceScanResult:
        """Probe one id and classify the outcome."""
        try:
            response_time = await asyncio.wait_for(
                self._transport.probe(slave_id, self._probe_timeout, self._probe_address),
                timeout=self._probe_timeout,
            )
        except (ProtocolTimeout, asyncio.TimeoutError):
            _LOGGER.debug("Slave %d: timeout", slave_id)
            return DeviceScanResult(slave_id, ScanStatus.TIMEOUT)
        except ProtocolException as err:
            _LOGGER.debug("Slave %d: exception %s", slave_id, err.description)
            return DeviceScanResult(
                slave_id,
                ScanStatus.EXCEPTION,
                exception_code=err.code,
                exception_message=err.description,
            )

        _LOGGER.debug("Slave %d: responded in %.1f ms", slave_id, response_time)
        return DeviceScanResult(slave_id, ScanStatus.SUCCESS, response_time=response_time)

    def _dispatch(self, callback: Callable, *args) -> None:
        if self._dispatcher is None:
            callback(*args)
        else:
            self._dispatcher.dispatch(callback, *args)

    def _publish_result(self, result: DeviceScanResult) -> None:
        self._results.append(result)
        if result.responded and self._log is not None:
            self._log.info(str(result))
        for listener in list(self._result_listeners):
            listener(result)

    def _publish_summary(self, summary: ScanSummary) -> None:
        self._last_summary = summary
        if self._log is not None:
            self._log.info(str(summary))
        for listener in list(self._summary_listeners):
            listener(summary)
