"""
Test ranking order, tie-breaking and tier partitioning.
"""

from scoring.logic.contracts import RankedResult, ReasoningTrace, ScoreBreakdown
from scoring.logic.ranker import partition, rank_candidates


def _result(candidate_id, total):
    return RankedResult(
        candidate_id=candidate_id,
        candidate=None,
        total=total,
        trace=ReasoningTrace(breakdown=ScoreBreakdown(total=total)),
    )


def test_rank_by_total_descending():
    ranked = rank_candidates([_result("a", 40), _result("b", 90), _result("c", 70)])
    assert [r.candidate_id for r in ranked] == ["b", "c", "a"]
    assert [r.rank for r in ranked] == [1, 2, 3]


def test_ties_broken_by_candidate_id():
    results = [_result("zeta", 80), _result("alpha", 80), _result("mid", 80)]
    first = rank_candidates(results)
    second = rank_candidates(list(reversed(results)))
    assert [r.candidate_id for r in first] == ["alpha", "mid", "zeta"]
    assert [r.candidate_id for r in first] == [r.candidate_id for r in second]


def test_rank_does_not_mutate_input():
    results = [_result("a", 10)]
    rank_candidates(results)
    assert results[0].rank == 0


def test_partition_without_overlap_or_gaps():
    ranked = rank_candidates([_result(f"c{i:02d}", 100 - i) for i in range(12)])
    top, alternatives = partition(ranked, 3, 5)

    assert [r.rank for r in top] == [1, 2, 3]
    assert [r.rank for r in alternatives] == [4, 5, 6, 7, 8]
    assert not {r.candidate_id for r in top} & {r.candidate_id for r in alternatives}


def test_partition_short_list():
    ranked = rank_candidates([_result("a", 50), _result("b", 40)])
    top, alternatives = partition(ranked, 3, 5)
    assert len(top) == 2
    assert alternatives == []


def test_partition_keeps_rest_when_unbounded():
    ranked = rank_candidates([_result(f"c{i}", 50 + i) for i in range(6)])
    top, alternatives = partition(ranked, 1)
    assert len(top) == 1
    assert len(alternatives) == 5


def test_partition_empty():
    assert partition([], 3, 5) == ([], [])
