"""Tests for connection decorator."""

import pytest
from unittest.mock import Mock

from modbus_term.domain.exceptions import TransportFailure
from modbus_term.infrastructure.decorators.connection_decorator import (
    require_connection,
)


class Service:
    """Minimal owner of a transport."""

    def __init__(self, transport):
        self._transport = transport

    @require_connection()
    async def execute(self, value):
        return f"executed {value}"


class TestRequireConnection:
    """Test connection decorator."""

    @pytest.mark.asyncio
    async def test_connected(self):
        """Test the wrapped method runs when connected."""
        service = Service(Mock(is_connected=True))
        assert await service.execute(1) == "executed 1"

    @pytest.mark.asyncio
    async def test_not_connected(self):
        """Test a closed transport raises TransportFailure."""
        service = Service(Mock(is_connected=False))

        with pytest.raises(TransportFailure, match="execute requires an open connection"):
            await service.execute(1)

    @pytest.mark.asyncio
    async def test_missing_transport(self):
        """Test an owner without a transport raises TransportFailure."""
        service = Service(None)

        with pytest.raises(TransportFailure):
            await service.execute(1)

    @pytest.mark.asyncio
    async def test_custom_attribute(self):
        """Test the transport attribute name is configurable."""

        class Other:
            def __init__(self):
                self.link = Mock(is_connected=True)

            @require_connection(transport_attr="link")
            async def run(self):
                return "ran"

        assert await Other().run() == "ran"
