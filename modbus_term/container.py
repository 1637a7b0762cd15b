"""Dependency container.

Builds the collaborators of one terminal session from Settings and a
transport supplied by the application, and wires them together:
- Infrastructure: dispatcher onto the owning event loop
- Application: register store, codec services, scanner, use case
- Slave mode: external write reconciliation and data image sync
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from .application.services import (
    CommunicationLog,
    DeviceScanner,
    ExternalWriteReconciler,
    HighlightTracker,
    RegisterStore,
    ResponseDecoder,
    SlaveDataSynchronizer,
    WriteRequestBuilder,
)
from .application.use_cases import ExecuteRequestUseCase
from .config import Settings, configure_logging
from .domain.interfaces import IModbusTransport
from .infrastructure.dispatch import Dispatcher

_LOGGER = logging.getLogger(__name__)


@dataclass
class Container:
    """Wired collaborators of one session.

    Attributes:
        settings: Configuration the container was built from
        transport: Application-supplied bus transport
        dispatcher: Dispatch thread for register map mutation
        communication_log: Shared sent/received/error log
        store: Local register map
        decoder: Read reply decoder
        builder: Write request builder
        execute_request: Master-mode request use case
        scanner: Device scanner
        highlight_tracker: Shared highlight clear timer
        reconciler: Folds a remote master's writes into the store
        slave_sync: Pushes store changes into the slave data image

    Example:
        >>> container = create_container(Settings.default(), transport)
        >>> result = await container.execute_request.execute(request)
    """

    settings: Settings
    transport: IModbusTransport
    dispatcher: Dispatcher
    communication_log: CommunicationLog
    store: RegisterStore
    decoder: ResponseDecoder
    builder: WriteRequestBuilder
    execute_request: ExecuteRequestUseCase
    scanner: DeviceScanner
    highlight_tracker: HighlightTracker
    reconciler: ExternalWriteReconciler
    slave_sync: SlaveDataSynchronizer

    @property
    def is_master(self) -> bool:
        return self.settings.connection.is_master

    def start_slave(self) -> None:
        """Listen for external writes and publish the register map."""
        self.reconciler.attach(self.transport, self.dispatcher)
        self.slave_sync.start()
        _LOGGER.info("Slave mode started")

    def stop_slave(self) -> None:
        self.slave_sync.stop()
        self.highlight_tracker.cancel()


def create_container(
    settings: Settings,
    transport: IModbusTransport,
    loop: Optional[asyncio.AbstractEventLoop] = None,
    apply_logging: bool = True,
) -> Container:
    """Create a fully wired container.

    In slave mode (``connection.is_master`` false) the reconciler is
    attached to the transport and the data image sync is started.

    Args:
        settings: Validated settings
        transport: Bus transport
        loop: Loop owning the register map (default: running loop)
        apply_logging: Apply the configured log level to the package logger

    Returns:
        Container with every collaborator created
    """
    if apply_logging:
        configure_logging(settings)

    reverse_order = settings.registers.reverse_order
    dispatcher = Dispatcher(loop)
    communication_log = CommunicationLog()
    store = RegisterStore(reverse_order=reverse_order)
    decoder = ResponseDecoder(reverse_order=reverse_order)
    builder = WriteRequestBuilder(
        reverse_order=reverse_order, communication_log=communication_log
    )
    highlight_tracker = HighlightTracker(
        store,
        duration=settings.registers.highlight_duration,
        loop=dispatcher.loop,
    )

    container = Container(
        settings=settings,
        transport=transport,
        dispatcher=dispatcher,
        communication_log=communication_log,
        store=store,
        decoder=decoder,
        builder=builder,
        execute_request=ExecuteRequestUseCase(
            transport, decoder, builder, communication_log
        ),
        scanner=DeviceScanner(
            transport,
            dispatcher,
            first_slave_id=settings.scan.first_slave_id,
            last_slave_id=settings.scan.last_slave_id,
            probe_timeout=settings.scan.probe_timeout,
            probe_address=settings.scan.probe_address,
            communication_log=communication_log,
        ),
        highlight_tracker=highlight_tracker,
        reconciler=ExternalWriteReconciler(store, highlight_tracker, communication_log),
        slave_sync=SlaveDataSynchronizer(store, transport),
    )

    if not container.is_master:
        container.start_slave()

    _LOGGER.debug(
        "Container created (%s mode, reverse_order=%s)",
        "master" if container.is_master else "slave",
        reverse_order,
    )
    return container
