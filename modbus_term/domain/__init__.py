"""Domain layer for the ModbusTerm core.

This layer contains:
- Interfaces: the transport contract the core consumes
- Value Objects: immutable domain primitives (data types, requests, results)
- Entities: register and coil definitions with identity
- Strategies: per-data-type codecs between typed values and register words
- Domain Services: pure address allocation

The domain layer has ZERO dependencies on external libraries (except Python stdlib).
"""
