"""Ordering bounded context: shopping cart, checkout and orders.

Carts and orders live in SQL tables written through ``ordering.uow.UnitOfWork``; the
domain registers the value objects they are read into.
"""

from protean.domain import Domain

ordering = Domain(name="ordering")
