"""
Reference Cell Domains
======================
One domain class per reference cell shape. Each implements the orbit model
(expansion, clamping, canonicalisation, seeding) and the orthonormal basis
that a moment-fitting solver needs.
"""
from symquad.domains.base import BaseDomain, OrbitDescriptor
from symquad.domains.prism import PrismDomain
from symquad.domains.registry import create_domain, list_domains, register_domain

__all__ = [
    "BaseDomain",
    "OrbitDescriptor",
    "PrismDomain",
    "create_domain",
    "list_domains",
    "register_domain",
]
