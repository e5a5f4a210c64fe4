"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives
its storage through the constructor, so handlers and tests can hand in
their own catalog file or credential store.
"""
