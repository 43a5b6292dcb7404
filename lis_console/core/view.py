# lis_console/core/view.py

"""
파생 뷰(Derived View) 모듈입니다.

스토어의 목록에 대해 텍스트 검색, 범주형 필터, 고정 크기 페이지네이션을 적용한
투영(projection)을 계산합니다. 숨은 상태가 없는 순수 함수이므로 렌더링마다 호출해도 안전합니다.
"""

import math
from collections import Counter
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from lis_console.core.store import ResourceState


class ViewFilterState(BaseModel):
    """화면 인스턴스마다 독립적인 검색어/필터/페이지 상태 (스토어가 아닌 뷰 계층 소유)."""
    model_config = ConfigDict(frozen=True)

    search_term: str = Field("", description="검색어")
    filters: Dict[str, Optional[str]] = Field(default_factory=dict, description="범주형 필터: 이름 -> 선택 값")
    page: int = Field(1, ge=1, description="1부터 시작하는 페이지 번호")


class PageProjection(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    page_items: List[Any]
    total_pages: int
    current_page: int
    filtered_count: int
    start_index: int

    @property
    def is_empty(self) -> bool:
        return self.filtered_count == 0


Predicate = Callable[[Any, ViewFilterState], bool]


def clamp_page(page: int, total_pages: int) -> int:
    """페이지 번호를 [1, max(total_pages, 1)] 범위로 제한합니다."""
    return max(1, min(page, max(total_pages, 1)))


def project(
    state: ResourceState,
    view_filter: ViewFilterState,
    predicate: Optional[Predicate] = None,
    page_size: int = 10,
) -> PageProjection:
    """
    목록을 필터링한 뒤 현재 페이지 구간을 잘라 반환합니다.

    - total_pages = ceil(filtered_count / page_size), 최소 0
    - 삭제나 필터로 결과가 줄어 현재 페이지가 범위를 벗어나면 마지막 페이지로 당깁니다.
    """
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    if predicate is None:
        filtered = list(state.items)
    else:
        filtered = [item for item in state.items if predicate(item, view_filter)]

    filtered_count = len(filtered)
    total_pages = math.ceil(filtered_count / page_size)
    current_page = clamp_page(view_filter.page, total_pages)
    start_index = (current_page - 1) * page_size

    return PageProjection(
        page_items=filtered[start_index:start_index + page_size],
        total_pages=total_pages,
        current_page=current_page,
        filtered_count=filtered_count,
        start_index=start_index,
    )


# =============================================================================
# 조건자(predicate) 구성 도우미
# =============================================================================
def field_value(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def is_unfiltered(value: Optional[str]) -> bool:
    """빈 값이나 'All', 'All Genders' 같은 전체 선택 값이면 True."""
    if value is None:
        return True
    normalized = value.strip().lower()
    return normalized in ("", "all") or normalized.startswith("all ")


def text_matches(item: Any, term: str, fields: Sequence[str]) -> bool:
    """대소문자를 구분하지 않는 부분 문자열 검색 (필드 간 OR)."""
    query = term.strip().lower()
    if not query:
        return True
    for name in fields:
        value = field_value(item, name)
        if value is not None and query in str(value).lower():
            return True
    return False


def categorical_matches(
    item: Any,
    filters: Mapping[str, Optional[str]],
    fields: Mapping[str, str],
    value_maps: Optional[Mapping[str, Mapping[str, str]]] = None,
) -> bool:
    """
    범주형 필터 정확 일치 검사 (필터 간 AND).
    `fields`는 필터 이름 -> 엔티티 필드명, `value_maps`는 화면 표시값 -> 저장값 매핑입니다.
    """
    for filter_name, field_name in fields.items():
        selected = filters.get(filter_name)
        if is_unfiltered(selected):
            continue
        if value_maps and filter_name in value_maps:
            selected = value_maps[filter_name].get(selected, selected)
        value = field_value(item, field_name)
        if value is None or str(value) != selected:
            return False
    return True


def make_predicate(
    search_fields: Sequence[str],
    categorical_fields: Optional[Mapping[str, str]] = None,
    value_maps: Optional[Mapping[str, Mapping[str, str]]] = None,
    extra: Iterable[Predicate] = (),
) -> Predicate:
    """검색(OR) AND 범주형 필터(AND) AND 추가 조건자를 결합한 조건자를 만듭니다."""
    categorical_fields = dict(categorical_fields or {})
    extra = list(extra)

    def _predicate(item: Any, view_filter: ViewFilterState) -> bool:
        if not text_matches(item, view_filter.search_term, search_fields):
            return False
        if not categorical_matches(item, view_filter.filters, categorical_fields, value_maps):
            return False
        return all(check(item, view_filter) for check in extra)

    return _predicate


# =============================================================================
# 페이지 이동 및 필터 변경 도우미 (새 ViewFilterState 반환)
# =============================================================================
def go_to_page(view_filter: ViewFilterState, page: int, total_pages: int) -> ViewFilterState:
    """범위 안의 페이지일 때만 이동합니다. 범위를 벗어나면 그대로 둡니다."""
    if 1 <= page <= total_pages:
        return view_filter.model_copy(update={"page": page})
    return view_filter


def next_page(view_filter: ViewFilterState, total_pages: int) -> ViewFilterState:
    return view_filter.model_copy(update={"page": clamp_page(view_filter.page + 1, total_pages)})


def prev_page(view_filter: ViewFilterState) -> ViewFilterState:
    return view_filter.model_copy(update={"page": max(view_filter.page - 1, 1)})


def with_search_term(view_filter: ViewFilterState, term: str) -> ViewFilterState:
    """검색어를 바꾸고 첫 페이지로 돌아갑니다."""
    return view_filter.model_copy(update={"search_term": term.strip(), "page": 1})


def with_filter(view_filter: ViewFilterState, name: str, value: Optional[str]) -> ViewFilterState:
    """범주형 필터 하나를 바꾸고 첫 페이지로 돌아갑니다."""
    filters = dict(view_filter.filters)
    filters[name] = value
    return view_filter.model_copy(update={"filters": filters, "page": 1})


def count_by(items: Iterable[Any], field: str) -> Dict[str, int]:
    """요약 카드용: 필드 값별 항목 수."""
    return dict(Counter(str(field_value(item, field)) for item in items if field_value(item, field) is not None))
