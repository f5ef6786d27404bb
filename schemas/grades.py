"""
schemas/grades.py

- 성적 레코드(정규 형태)와 집계 결과 스키마
- 학점 척도(GradingScale)는 (만점, [(기준점, 등급)]) 설정값으로 표현하고
  등급 분포 계산 시 인자로 전달받는다. 4.0/5.0 기준을 코드에 고정하지 않음.
"""

from __future__ import annotations

from typing import List, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


LETTERS = ("A", "B", "C", "D", "F")


# =========================================================
# 1) 성적 레코드
# =========================================================

class GradeRecord(BaseModel):
    """저장/가져오기 이후 엔진이 받는 유일한 레코드 형태"""
    id: Union[int, str]                      # 고유 ID (생성 시각 ms)
    name: str                                # 과목명
    grade: float                             # 평점 (0.0 ~ 만점)
    credits: float                           # 학점 수
    year: str = ""                           # 학년 라벨 (예: "Year 1")
    session: str = ""                        # 학기 라벨 (예: "1st Semester")

    model_config = ConfigDict(extra="ignore")

    @property
    def quality_points(self) -> float:
        return self.grade * self.credits


class GradeCreate(BaseModel):
    """성적 추가 폼 입력. 학점 수 정책/만점 검사는 services.grade_service 에서 수행"""
    name: str = Field(..., min_length=2, description="과목명 (예: CS 101)")
    grade: float = Field(..., ge=0, le=5, description="평점 0.0 ~ 5.0")
    credits: float = Field(..., description="학점 수")
    year: str = Field(..., min_length=1, description='학년 (예: "Year 1")')
    session: str = Field(..., min_length=1, description='학기 (예: "1st Semester")')

    @model_validator(mode="before")
    @classmethod
    def _strip_text(cls, data):
        if isinstance(data, dict):
            return {k: v.strip() if isinstance(v, str) else v for k, v in data.items()}
        return data


# =========================================================
# 2) 학기 키 / 집계
# =========================================================

class SemesterKey(NamedTuple):
    year: str
    session: str

    @property
    def label(self) -> str:
        return " ".join(part for part in (self.year.strip(), self.session.strip()) if part)


class SemesterAggregate(BaseModel):
    total_credits: float = 0.0
    total_quality_points: float = 0.0

    @property
    def semester_gpa(self) -> float:
        # 학점 합이 0이면 NaN/Infinity 대신 0
        if self.total_credits == 0:
            return 0.0
        return self.total_quality_points / self.total_credits


class SemesterGroup(BaseModel):
    year: str
    session: str
    aggregate: SemesterAggregate = Field(default_factory=SemesterAggregate)
    records: List[GradeRecord] = Field(default_factory=list)  # 입력 순서 유지

    @property
    def key(self) -> SemesterKey:
        return SemesterKey(self.year, self.session)


class TrajectoryPoint(BaseModel):
    label: str
    year: str
    session: str
    semester_gpa: float          # 소수 둘째 자리 반올림 (표시용)
    cumulative_gpa: float        # 소수 둘째 자리 반올림 (표시용)
    semester_credits: float
    cumulative_credits: float


# =========================================================
# 3) 학점 척도 / 등급 분포
# =========================================================

class GradingScale(BaseModel):
    """
    만점과 (기준점, 등급) 구간 목록
    - bands는 기준점 내림차순, 마지막 구간은 0 이하(나머지 전부)여야 함
    - [0, 만점] 전체를 빈틈/중복 없이 나눔
    """
    max_point: float = Field(..., gt=0)
    bands: List[Tuple[float, str]]

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_bands(self):
        thresholds = [t for t, _ in self.bands]
        if thresholds != sorted(thresholds, reverse=True) or len(set(thresholds)) != len(thresholds):
            raise ValueError("band thresholds must be strictly descending")
        if not self.bands or thresholds[-1] > 0:
            raise ValueError("last band must cover 0")
        if tuple(letter for _, letter in self.bands) != LETTERS:
            raise ValueError(f"bands must map to letters {LETTERS}")
        return self

    @classmethod
    def from_max(cls, max_point: float) -> "GradingScale":
        # A ≥ 4/5·max, B ≥ 3/5·max, C ≥ 2/5·max, D ≥ 1/5·max, 나머지 F
        bands = [(k * max_point / 5, letter) for k, letter in zip((4, 3, 2, 1), LETTERS)]
        bands.append((0.0, "F"))
        return cls(max_point=max_point, bands=bands)

    def letter_for(self, grade: float) -> str:
        for threshold, letter in self.bands:
            if grade >= threshold:
                return letter
        return self.bands[-1][1]


FIVE_POINT = GradingScale.from_max(5.0)
FOUR_POINT = GradingScale.from_max(4.0)


def get_scale(points: Union[int, float]) -> GradingScale:
    """설정값(5 또는 4)을 척도 객체로 변환"""
    if float(points) == 5.0:
        return FIVE_POINT
    if float(points) == 4.0:
        return FOUR_POINT
    return GradingScale.from_max(float(points))


class DistributionBucket(BaseModel):
    grade: str
    count: int = 0


class GradeDistribution(BaseModel):
    buckets: List[DistributionBucket]

    @property
    def total(self) -> int:
        return sum(b.count for b in self.buckets)

    def count(self, letter: str) -> int:
        for b in self.buckets:
            if b.grade == letter:
                return b.count
        raise KeyError(letter)


# =========================================================
# 4) 요약 / 공유
# =========================================================

class GpaSummary(BaseModel):
    cgpa: float
    total_credits: float
    semester_gpa: float                 # 가장 최근 학기
    semester_credits: float             # 가장 최근 학기
    latest_semester: Optional[str] = None
    max_point: float
    trajectory: List[TrajectoryPoint]
    distribution: GradeDistribution


class SharedCourse(BaseModel):
    name: str
    grade: float
    credits: float


class SemesterSharePayload(BaseModel):
    semester: str
    gpa: str                             # "4.43" 형식 문자열
    courses: List[SharedCourse]
