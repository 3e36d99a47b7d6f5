"""Tour Office package.

This package is organized by feature modules (groups, participants, payments,
ledger, rates, ...) with a thin Flask controller layer and service/repository
layers underneath.
"""
