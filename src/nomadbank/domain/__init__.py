"""Domain layer for nomadbank.

Services are imported from their own modules (for example
``nomadbank.domain.generation``) so that the database layer can import
``nomadbank.domain.entities`` without pulling in the services that depend
on it.
"""
