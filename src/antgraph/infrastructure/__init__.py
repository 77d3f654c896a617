"""Infrastructure layer — graph engine, algorithms, and map files.

This layer depends on stdlib, NetworkX, and the domain layer.
It must never import from services, commands, or output.
The service layer bridges between infrastructure and the CLI.
"""
