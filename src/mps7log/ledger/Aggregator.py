from typing import Callable, Iterator, Optional

from sortedcontainers import SortedDict

from mps7log.proto import MPS7Parser, MPS7Record, RecordType


class Aggregator:
    """
    Folds MPS7 records into per-user balances and per-type totals.

    Credits add to a user's balance and debits subtract from it. Balances
    are kept sorted by user id so reports come out in a stable order.

    Example:
        agg = Aggregator()
        agg.consume(parser)
        agg.balance(2456938384156277127)
        agg.count(RecordType.START_AUTOPAY)
    """

    def __init__(self) -> None:
        self._balances = SortedDict()
        self._totals = {kind: 0.0 for kind in RecordType if kind.has_amount}
        self._counts = {kind: 0 for kind in RecordType}

    def add(self, record: MPS7Record) -> None:
        self._counts[record.kind] += 1
        if not record.kind.has_amount:
            return

        self._totals[record.kind] += record.amount
        delta = record.amount if record.kind is RecordType.CREDIT else -record.amount
        self._balances[record.user_id] = self._balances.get(record.user_id, 0.0) + delta

    def consume(
        self,
        parser: MPS7Parser,
        on_record: Optional[Callable[[int, MPS7Record], None]] = None,
    ) -> int:
        """
        Drain exactly len(parser) records into the aggregate.

        Args:
            parser: A parser that has passed its compatibility check
            on_record: Called with (index, record) before each is folded in

        Returns:
            Number of records consumed
        """
        consumed = 0
        for index, record in enumerate(parser):
            if on_record is not None:
                on_record(index, record)
            self.add(record)
            consumed += 1
        return consumed

    def balance(self, user_id: int) -> float:
        return self._balances.get(user_id, 0.0)

    def balances(self) -> Iterator[tuple[int, float]]:
        """(user_id, balance) pairs in ascending user id order."""
        return iter(self._balances.items())

    def total(self, kind: RecordType) -> float:
        """Summed amount for a debit or credit kind."""
        if not kind.has_amount:
            raise ValueError(f"{kind.label} records carry no amount")
        return self._totals[kind]

    def count(self, kind: RecordType) -> int:
        return self._counts[kind]
