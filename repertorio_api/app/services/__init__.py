"""
Service layer abstraction.

Services hold the business logic and reach storage only through the
store interface, so handlers stay thin and tests can swap the backing
file for an in-memory list.
"""
