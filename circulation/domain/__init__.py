"""Domain-level policies and business rules.

This package contains logic that defines *what* the circulation rules are
(checkout limits, loan periods, late fees), independent from *where* they
are applied (services, repositories, etc.).
"""
