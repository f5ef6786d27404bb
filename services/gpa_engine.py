"""
services/gpa_engine.py

성적 레코드 목록 → 학기별 집계 / 누적 GPA 추이 / 전체 CGPA / 등급 분포.

- 입력만 읽는 순수 함수들. 저장소, 설정, 네트워크에 접근하지 않는다.
- 학기 정렬은 라벨 문자열 정렬이 아니라 semester_sort_key 기준
  ("Year 10"이 "Year 2"보다 뒤)
- 누적 계산은 반올림 전 값으로 하고, 표시용 값만 소수 둘째 자리로 반올림
"""

import re
from typing import Dict, Iterable, List, Optional, Sequence

from schemas.grades import (
    LETTERS,
    DistributionBucket,
    GpaSummary,
    GradeDistribution,
    GradeRecord,
    GradingScale,
    SemesterGroup,
    SemesterKey,
    SemesterSharePayload,
    SharedCourse,
    TrajectoryPoint,
)
from schemas.ai_schemas import ExpectedCourse


_NUMBER = re.compile(r"\d+")

# 숫자가 없는 학기 이름의 순서 (harmattan/rain 은 1/2학기 명칭)
_SESSION_WORDS = {
    "first": 1,
    "harmattan": 1,
    "fall": 1,
    "autumn": 1,
    "second": 2,
    "rain": 2,
    "spring": 2,
    "third": 3,
    "summer": 90,
}
_UNKNOWN = 10_000

# 연도(4자리)가 붙은 라벨 ("Spring 2023")은 달력 순서
_CALENDAR_YEAR = re.compile(r"\b\d{4}\b")
_CALENDAR_TERMS = {
    "winter": 1,
    "spring": 2,
    "summer": 3,
    "fall": 4,
    "autumn": 4,
}


def _rank(label: str, words: Optional[Dict[str, int]] = None) -> int:
    match = _NUMBER.search(label)
    if match:
        return int(match.group())
    lowered = label.lower()
    for word, rank in (words or {}).items():
        if word in lowered:
            return rank
    return _UNKNOWN


def semester_sort_key(key: SemesterKey):
    """(학년 번호, 학기 번호) 순 정렬 키. 동률이면 라벨 사전순으로 전체 순서 보장"""
    words = _CALENDAR_TERMS if _CALENDAR_YEAR.search(key.year) else _SESSION_WORDS
    # session 이 비어 있으면 year 라벨 안의 학기 단어로 순서 결정 ("Fall 2023")
    term = key.session or _NUMBER.sub("", key.year)
    return (
        _rank(key.year),
        _rank(term, words),
        key.year.casefold(),
        key.session.casefold(),
    )


def _round2(value: float) -> float:
    return round(value, 2)


# ==========================================================
# [1] 학기별 그룹핑
# ==========================================================
def group_by_semester(records: Iterable[GradeRecord]) -> Dict[SemesterKey, SemesterGroup]:
    """
    (year, session) 키별로 학점 합과 quality point 합을 누적.
    검증 없음: 0 또는 음수 학점도 그대로 합산된다.
    """
    groups: Dict[SemesterKey, SemesterGroup] = {}
    for record in records:
        key = SemesterKey(record.year, record.session)
        if key not in groups:
            groups[key] = SemesterGroup(year=record.year, session=record.session)
        group = groups[key]
        group.records.append(record)
        group.aggregate.total_credits += record.credits
        group.aggregate.total_quality_points += record.quality_points
    return groups


def ordered_groups(groups: Dict[SemesterKey, SemesterGroup]) -> List[SemesterGroup]:
    return [groups[key] for key in sorted(groups, key=semester_sort_key)]


# ==========================================================
# [2] 누적 추이 / 전체 CGPA
# ==========================================================
def compute_trajectory(groups: Dict[SemesterKey, SemesterGroup]) -> List[TrajectoryPoint]:
    running_credits = 0.0
    running_points = 0.0
    points: List[TrajectoryPoint] = []

    for group in ordered_groups(groups):
        aggregate = group.aggregate
        running_credits += aggregate.total_credits
        running_points += aggregate.total_quality_points
        cumulative = running_points / running_credits if running_credits != 0 else 0.0

        points.append(TrajectoryPoint(
            label=group.key.label,
            year=group.year,
            session=group.session,
            semester_gpa=_round2(aggregate.semester_gpa),
            cumulative_gpa=_round2(cumulative),
            semester_credits=aggregate.total_credits,
            cumulative_credits=running_credits,
        ))
    return points


def compute_overall_cgpa(groups: Dict[SemesterKey, SemesterGroup]) -> float:
    # 추이의 마지막 누적값과 같은 순서로 더해야 부동소수 결과가 일치함
    total_credits = 0.0
    total_points = 0.0
    for group in ordered_groups(groups):
        total_credits += group.aggregate.total_credits
        total_points += group.aggregate.total_quality_points
    if total_credits == 0:
        return 0.0
    return _round2(total_points / total_credits)


# ==========================================================
# [3] 등급 분포
# ==========================================================
def compute_grade_distribution(
    records: Sequence[GradeRecord],
    scale: GradingScale,
    semester: Optional[SemesterKey] = None,
) -> GradeDistribution:
    """semester가 None이면 전체, 아니면 해당 학기 레코드만 집계"""
    counts = {letter: 0 for letter in LETTERS}
    for record in records:
        if semester is not None and (record.year, record.session) != tuple(semester):
            continue
        counts[scale.letter_for(record.grade)] += 1
    return GradeDistribution(buckets=[DistributionBucket(grade=l, count=c) for l, c in counts.items()])


# ==========================================================
# [4] 예상 GPA (LLM 없이 결정적 계산)
# ==========================================================
def predict_gpa(
    current_gpa: float,
    total_credits: float,
    courses: Sequence[ExpectedCourse],
    scale: GradingScale,
) -> float:
    future_credits = sum(c.credits for c in courses)
    future_points = sum(c.expected_grade * c.credits for c in courses)

    denominator = total_credits + future_credits
    if denominator == 0:
        return 0.0

    predicted = (current_gpa * total_credits + future_points) / denominator
    return min(max(predicted, 0.0), scale.max_point)


# ==========================================================
# [5] 대시보드 요약 / 학기 공유 데이터
# ==========================================================
def summarize(records: Sequence[GradeRecord], scale: GradingScale) -> GpaSummary:
    groups = group_by_semester(records)
    trajectory = compute_trajectory(groups)
    latest = trajectory[-1] if trajectory else None

    return GpaSummary(
        cgpa=compute_overall_cgpa(groups),
        total_credits=latest.cumulative_credits if latest else 0.0,
        semester_gpa=latest.semester_gpa if latest else 0.0,
        semester_credits=latest.semester_credits if latest else 0.0,
        latest_semester=latest.label if latest else None,
        max_point=scale.max_point,
        trajectory=trajectory,
        distribution=compute_grade_distribution(records, scale),
    )


def semester_share_payload(group: SemesterGroup) -> SemesterSharePayload:
    return SemesterSharePayload(
        semester=group.key.label,
        gpa=f"{group.aggregate.semester_gpa:.2f}",
        courses=[SharedCourse(name=r.name, grade=r.grade, credits=r.credits) for r in group.records],
    )
