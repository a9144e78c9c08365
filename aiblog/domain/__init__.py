"""
Domain package.

One sub-package per domain (category, post, ai). Each domain splits into
layer modules:
- controller: FastAPI routers, request/response mapping, no business logic
- service: business rules, raises BusinessError
- repository: data access over a SQLAlchemy session
- entity: persisted entities

Dependencies flow controller -> service -> repository. Domains must not
depend on each other in a cycle.
"""
