"""Infrastructure layer for the ModbusTerm core.

The infrastructure layer contains the mechanics the application services
lean on:
- State machines (device scan lifecycle)
- Decorators (transport error handling, connection guards)
- Dispatch (marshaling transport callbacks onto the event loop)

Concrete RTU/TCP transports implement domain.interfaces.IModbusTransport
and live outside this package.
"""
