"""Ports the application layer depends on."""

from idlink.application.ports.unit_of_work import AccountUnitOfWork, TransactionRunner

__all__ = ["AccountUnitOfWork", "TransactionRunner"]
