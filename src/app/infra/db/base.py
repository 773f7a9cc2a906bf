# src/app/infra/db/base.py
"""
Abstract base class for the food safety record store.
This interface allows easy swapping between different store backends.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from src.app.domain.models import FoodSafetyRecord


ReasonPredicate = Callable[[str], bool]


class FoodSafetyRepository(ABC):
    """
    Abstract interface for food safety record storage.

    Implementations:
    - SupabaseFoodSafetyRepository: Postgres table accessed through Supabase
    """

    @abstractmethod
    def query(
        self,
        pet: str,
        food: str,
    ) -> Optional[FoodSafetyRecord]:
        """
        Find a stored answer for a (pet, food) pair.

        Both inputs are lower-cased and matched exactly. When several rows
        match, the earliest inserted one is returned.

        Args:
            pet: Species name
            food: Food item name

        Returns:
            The matching record, or None if there is none

        Raises:
            StoreReadError: If the store cannot be queried
        """
        pass

    @abstractmethod
    def persist(
        self,
        record: FoodSafetyRecord,
    ) -> FoodSafetyRecord:
        """
        Append a new record. Never updates an existing row.

        Args:
            record: The record to store (created_at is assigned by the store)

        Returns:
            The stored record with store-assigned fields populated

        Raises:
            StoreWriteError: If the store rejects or cannot take the write
        """
        pass

    @abstractmethod
    def list_all(self) -> list[FoodSafetyRecord]:
        """
        Return every stored record in insertion order.

        Raises:
            StoreReadError: If the store cannot be scanned
        """
        pass

    @abstractmethod
    def delete_where(
        self,
        predicate: ReasonPredicate,
    ) -> int:
        """
        Delete unknown-status records whose reason matches a predicate.

        Args:
            predicate: Called with each candidate's reason text

        Returns:
            Number of records deleted
        """
        pass
