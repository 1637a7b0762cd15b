"""Application layer for the ModbusTerm core.

This layer contains use cases and application services that orchestrate
domain logic and infrastructure. It sits between the terminal front end
and the domain/infrastructure layers.

Architecture Pattern: Clean Architecture / Hexagonal Architecture
- Use Cases: Application-specific business rules
- Services: Reusable application logic (store, codec services, scanner)
- DTOs: Data transfer objects for layer boundaries
"""
