"""
AI domain: text generation for blog authoring.

Hexagonal layout:
- port: TextGenerationPort, the capability the domain needs
- adapter: concrete provider integrations implementing the port
- service: provider failover and prompt logic, depends on the port only
- controller: FastAPI routes
"""
