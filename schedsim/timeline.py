from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from .models import ExecutionSlice

# (pid, start, end); pid is None for an idle gap.
Segment = Tuple[Optional[int], int, int]


class Timeline:
    """
    Ordered, non-overlapping execution slices of one policy run.

    Idle time is never stored: it is the space between one slice's end and
    the next slice's start (or between time 0 and the first slice).
    """

    def __init__(self, slices: Optional[Iterable[ExecutionSlice]] = None) -> None:
        self._slices: List[ExecutionSlice] = []
        for sl in slices or ():
            self.append(sl.pid, sl.start_time, sl.end_time)

    def append(self, pid: int, start_time: int, end_time: int) -> ExecutionSlice:
        """Open a new slice, never merging with the previous one."""
        if end_time <= start_time:
            raise ValueError(f"slice for job {pid} must end after it starts ({start_time}, {end_time})")
        if self._slices and start_time < self._slices[-1].end_time:
            raise ValueError(
                f"slice for job {pid} starting at {start_time} overlaps slice ending at {self._slices[-1].end_time}"
            )
        sl = ExecutionSlice(pid=pid, start_time=start_time, end_time=end_time)
        self._slices.append(sl)
        return sl

    def extend(self, pid: int, start_time: int, end_time: int) -> ExecutionSlice:
        """
        Record execution, growing the last slice when the same job keeps the CPU.

        The last slice is only extended when it belongs to ``pid`` and ends
        exactly at ``start_time``; anything else opens a new slice.
        """
        last = self._slices[-1] if self._slices else None
        if last is not None and last.pid == pid and last.end_time == start_time:
            if end_time <= start_time:
                raise ValueError(f"slice for job {pid} must end after it starts ({start_time}, {end_time})")
            merged = ExecutionSlice(pid=pid, start_time=last.start_time, end_time=end_time)
            self._slices[-1] = merged
            return merged
        return self.append(pid, start_time, end_time)

    @property
    def slices(self) -> Tuple[ExecutionSlice, ...]:
        return tuple(self._slices)

    def __iter__(self) -> Iterator[ExecutionSlice]:
        return iter(self._slices)

    def __len__(self) -> int:
        return len(self._slices)

    def __getitem__(self, index: int) -> ExecutionSlice:
        return self._slices[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timeline):
            return NotImplemented
        return self._slices == other._slices

    def __repr__(self) -> str:
        return f"Timeline({self.as_tuples()!r})"

    def as_tuples(self) -> List[Tuple[int, int, int]]:
        return [(sl.pid, sl.start_time, sl.end_time) for sl in self._slices]

    def segments(self) -> Iterator[Segment]:
        """Yield busy slices and idle gaps in time order, starting at 0."""
        last_time = 0
        for sl in self._slices:
            if sl.start_time > last_time:
                yield (None, last_time, sl.start_time)
            yield (sl.pid, sl.start_time, sl.end_time)
            last_time = sl.end_time

    def idle_gaps(self) -> List[Tuple[int, int]]:
        return [(start, end) for pid, start, end in self.segments() if pid is None]

    @property
    def busy_time(self) -> int:
        return sum(sl.duration for sl in self._slices)

    @property
    def idle_time(self) -> int:
        return sum(end - start for start, end in self.idle_gaps())

    @property
    def makespan(self) -> int:
        return self._slices[-1].end_time if self._slices else 0

    @property
    def context_switches(self) -> int:
        return sum(1 for prev, cur in zip(self._slices, self._slices[1:]) if prev.pid != cur.pid)

    def slices_for(self, pid: int) -> List[ExecutionSlice]:
        return [sl for sl in self._slices if sl.pid == pid]

    def first_start(self, pid: int) -> Optional[int]:
        for sl in self._slices:
            if sl.pid == pid:
                return sl.start_time
        return None

    def last_end(self, pid: int) -> Optional[int]:
        for sl in reversed(self._slices):
            if sl.pid == pid:
                return sl.end_time
        return None
