"""Container stitching analytic pieces into one continuous trajectory."""

from __future__ import annotations

import logging
import math
from bisect import bisect_right
from typing import Iterator, List, Sequence, Type

import numpy as np

from ..interfaces.pieces import TrajectoryPiece
from ..interfaces.states import ParticleState, TimeRange

logger = logging.getLogger(__name__)


class PiecewiseTrajectory:
    """
    Ordered, non-empty sequence of pieces with contiguous time ranges.

    Consecutive pieces satisfy ``pieces[i].range.end == pieces[i+1].range.begin``
    and the trajectory range runs from the first piece's begin to the last
    piece's end. Mass and charge are shared by every piece. Kinematic queries
    are answered by the piece nearest the requested time.

    The trajectory owns its pieces. Pieces are immutable, so shortening one
    replaces it with ``piece.with_range(...)``.

    Args:
        piece: The first piece
    """

    def __init__(self, piece: TrajectoryPiece) -> None:
        self._pieces: List[TrajectoryPiece] = [piece]
        self._begins: List[float] = [piece.range.begin]

    @classmethod
    def from_state(
        cls,
        state: ParticleState,
        bnom,
        trange: TimeRange | Sequence[float],
        piece_type: Type[TrajectoryPiece],
    ) -> "PiecewiseTrajectory":
        """Build a single-piece trajectory of ``piece_type``."""

        if not isinstance(trange, TimeRange):
            trange = TimeRange(*trange)
        return cls(piece_type(state, bnom, trange))

    # ------------------------------------------------------------------
    # piece access
    # ------------------------------------------------------------------

    @property
    def pieces(self) -> tuple[TrajectoryPiece, ...]:
        return tuple(self._pieces)

    def piece(self, index: int) -> TrajectoryPiece:
        if not 0 <= index < len(self._pieces):
            raise IndexError(
                f"Piece index {index} out of range for {len(self._pieces)} pieces"
            )
        return self._pieces[index]

    def __getitem__(self, index: int) -> TrajectoryPiece:
        return self._pieces[index]

    def __len__(self) -> int:
        return len(self._pieces)

    def __iter__(self) -> Iterator[TrajectoryPiece]:
        return iter(self._pieces)

    @property
    def front(self) -> TrajectoryPiece:
        return self._pieces[0]

    @property
    def back(self) -> TrajectoryPiece:
        return self._pieces[-1]

    @property
    def range(self) -> TimeRange:
        return TimeRange(self._pieces[0].range.begin, self._pieces[-1].range.end)

    @property
    def mass(self) -> float:
        return self._pieces[0].mass

    @property
    def charge(self) -> int:
        return self._pieces[0].charge

    def nearest_index(self, time: float) -> int:
        """Index of the piece whose range holds ``time``.

        Times before the trajectory map to the first piece and times after it
        to the last. A time on a join belongs to the later piece.
        """
        index = bisect_right(self._begins, time) - 1
        return min(max(index, 0), len(self._pieces) - 1)

    def nearest_piece(self, time: float) -> TrajectoryPiece:
        return self._pieces[self.nearest_index(time)]

    # ------------------------------------------------------------------
    # kinematics
    # ------------------------------------------------------------------

    def position(self, time: float) -> np.ndarray:
        return self.nearest_piece(time).position(time)

    def velocity(self, time: float) -> np.ndarray:
        return self.nearest_piece(time).velocity(time)

    def direction(self, time: float) -> np.ndarray:
        return self.nearest_piece(time).direction(time)

    def momentum(self, time: float) -> np.ndarray:
        return self.nearest_piece(time).momentum(time)

    def energy(self, time: float) -> float:
        return self.nearest_piece(time).energy(time)

    def state(self, time: float) -> ParticleState:
        return self.nearest_piece(time).state(time)

    # ------------------------------------------------------------------
    # mutation
    # ------------------------------------------------------------------

    def append(self, piece: TrajectoryPiece, allow_truncate: bool = False) -> None:
        """
        Append ``piece`` at the open end of the trajectory.

        A piece beginning inside the last piece shortens it to end where the
        new piece begins. A piece beginning at or before the last piece's begin
        discards whole pieces, which is only permitted with
        ``allow_truncate=True``.

        Raises:
            ValueError: On a mass or charge mismatch, a gap after the current
                end, or a discard without ``allow_truncate``
        """
        if not math.isclose(piece.mass, self.mass, rel_tol=1e-12, abs_tol=1e-12):
            raise ValueError(f"Piece mass {piece.mass} differs from trajectory mass {self.mass}")
        if piece.charge != self.charge:
            raise ValueError(
                f"Piece charge {piece.charge} differs from trajectory charge {self.charge}"
            )
        tbegin = piece.range.begin
        last = self._pieces[-1]
        if tbegin > last.range.end:
            raise ValueError(
                f"Appending at {tbegin} leaves a gap after trajectory end {last.range.end}"
            )

        if tbegin > last.range.begin:
            self._pieces[-1] = last.with_range(last.range.restrict(end=tbegin))
        else:
            if not allow_truncate:
                raise ValueError(
                    f"Appending at {tbegin} would discard pieces beginning at or after it; "
                    "pass allow_truncate=True"
                )
            dropped = 0
            while self._pieces and self._pieces[-1].range.begin >= tbegin:
                self._pieces.pop()
                dropped += 1
            if self._pieces:
                last = self._pieces[-1]
                self._pieces[-1] = last.with_range(last.range.restrict(end=tbegin))
            logger.debug("append at %.4f ns discarded %d piece(s)", tbegin, dropped)

        self._pieces.append(piece)
        self._reindex()

    def set_range(self, trange: TimeRange | Sequence[float], allow_truncate: bool = False) -> None:
        """
        Move the trajectory begin and end to ``trange``.

        Pieces lying wholly outside the new range are dropped only with
        ``allow_truncate=True``; at least one piece always survives.

        Raises:
            ValueError: If pieces would be dropped without ``allow_truncate``
        """
        if not isinstance(trange, TimeRange):
            trange = TimeRange(*trange)

        if trange.begin == trange.end:
            keep = [self.nearest_piece(trange.begin)]
        else:
            keep = [
                p
                for p in self._pieces
                if p.range.end > trange.begin and p.range.begin < trange.end
            ]
            if not keep:
                keep = [self._pieces[-1] if trange.begin >= self.range.end else self._pieces[0]]

        if len(keep) < len(self._pieces):
            if not allow_truncate:
                raise ValueError(
                    f"Setting range {trange!r} would drop {len(self._pieces) - len(keep)} "
                    "piece(s); pass allow_truncate=True"
                )
            logger.debug(
                "set_range %r dropped %d piece(s)", trange, len(self._pieces) - len(keep)
            )

        if len(keep) == 1:
            keep[0] = keep[0].with_range(trange)
        else:
            keep[0] = keep[0].with_range(keep[0].range.restrict(begin=trange.begin))
            keep[-1] = keep[-1].with_range(keep[-1].range.restrict(end=trange.end))
        self._pieces = keep
        self._reindex()

    def _reindex(self) -> None:
        self._begins = [p.range.begin for p in self._pieces]

    def __repr__(self) -> str:
        return f"PiecewiseTrajectory({len(self._pieces)} pieces, range={self.range!r})"
