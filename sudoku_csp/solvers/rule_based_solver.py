"""Rule-based solver: logical deduction first, backtracking as a last resort."""

from __future__ import annotations
import collections
import logging
from typing import Sequence, Tuple

from .base_solver import BaseSolver
from .backtracking_solver import search
from .rules import RULE_TIERS, Rule, RuleOutcome
from ..core.board import SudokuBoard
from ..core.propagation import initialize_candidates

log = logging.getLogger(__name__)


class RuleBasedSolver(BaseSolver):
    """
    Sudoku solver driven by human-style deduction rules.
    
    Rules are grouped in tiers of increasing cost:
    
    - Basic: naked single, hidden single, naked pair, hidden pair
    - Intermediate: locked candidates (pointing, claiming)
    - Complex: X-Wing, Swordfish
    
    Whenever any rule makes progress the driver starts again from the
    basic tier, so cheap rules always run to a fixpoint before expensive
    ones are tried. If no rule applies and the puzzle is still open, the
    solver falls back to backtracking over the pruned domains.
    """
    
    name = "Rule-Based"
    
    def __init__(
        self,
        use_backup_backtracking: bool = True,
        tiers: Sequence[Tuple[Rule, ...]] = RULE_TIERS
    ):
        """
        Args:
            use_backup_backtracking: Fall back to search when deduction stalls.
            tiers: Rule tiers to apply, cheapest first.
        """
        super().__init__()
        self.use_backup_backtracking = use_backup_backtracking
        self.tiers = tuple(tiers)
    
    def initialize(self, board: SudokuBoard) -> bool:
        """Build propagated candidate domains from the givens."""
        if not initialize_candidates(board):
            log.info("%s: puzzle givens are contradictory", self.name)
            return False
        return True
    
    def _solve(self, board: SudokuBoard) -> bool:
        """Apply rules to a fixpoint, then search if needed."""
        self.stats.extra["rule_applications"] = {}
        self.stats.extra["used_backtracking"] = False
        
        if board.candidates is None and not self.initialize(board):
            return False
        
        if self.deduce(board) is RuleOutcome.CONTRADICTION:
            return False
        
        if board.is_complete():
            return board.is_valid()
        
        if not self.use_backup_backtracking:
            return False
        
        log.debug("%s: deduction stalled with %d empty cells, searching",
                  self.name, board.count_empty())
        self.stats.extra["used_backtracking"] = True
        return search(board, self.stats, self.deadline)
    
    def deduce(self, board: SudokuBoard) -> RuleOutcome:
        """
        Apply the rule tiers until none of them makes progress.
        
        Returns:
            PROGRESS if anything was deduced, NO_PROGRESS if nothing was,
            CONTRADICTION if a rule proved the current domains impossible.
        """
        applications = collections.Counter()
        result = RuleOutcome.NO_PROGRESS
        
        progressed = True
        while progressed:
            self._check_deadline()
            progressed = False
            for tier in self.tiers:
                for rule in tier:
                    outcome = rule(board)
                    if outcome is RuleOutcome.NO_PROGRESS:
                        continue
                    if outcome is RuleOutcome.CONTRADICTION:
                        log.debug("%s: contradiction from %s", self.name, rule.__name__)
                        self._record(applications)
                        return outcome
                    applications[rule.__name__] += 1
                    result = RuleOutcome.PROGRESS
                    progressed = True
                    break
                if progressed:
                    break
        
        self._record(applications)
        return result
    
    def _record(self, applications: collections.Counter) -> None:
        counts = self.stats.extra.setdefault("rule_applications", {})
        for name, n in applications.items():
            counts[name] = counts.get(name, 0) + n
