# lis_console/mockapi/collections.py

"""
mockapi 백엔드의 인메모리 컬렉션 저장소입니다.
레코드는 JSON 객체(dict) 그대로 저장하며, 식별자는 1부터 증가하는 문자열입니다.
"""

import copy
import logging
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


class InMemoryCollection:
    def __init__(self, name: str, records: Optional[Iterable[Dict[str, Any]]] = None):
        self.name = name
        self._records: List[Dict[str, Any]] = []
        self._next_id = 1
        for record in records or ():
            self.create(record)

    def __len__(self) -> int:
        return len(self._records)

    def _find(self, record_id: str) -> Optional[Dict[str, Any]]:
        for record in self._records:
            if record["id"] == record_id:
                return record
        return None

    def list(self, *, sort_by: Optional[str] = None, order: str = "asc") -> List[Dict[str, Any]]:
        records = [copy.deepcopy(r) for r in self._records]
        if sort_by:
            # 값이 없는 레코드는 항상 뒤로
            present = [r for r in records if r.get(sort_by) is not None]
            missing = [r for r in records if r.get(sort_by) is None]
            present.sort(key=lambda r: r[sort_by], reverse=(order.lower() == "desc"))
            records = present + missing
        return records

    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        record = self._find(record_id)
        return copy.deepcopy(record) if record is not None else None

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        record = copy.deepcopy(data)
        # 클라이언트가 보낸 id는 무시하고 서버가 부여한다.
        record["id"] = str(self._next_id)
        self._next_id += 1
        self._records.append(record)
        logger.debug("[%s] 레코드 생성 (id=%s)", self.name, record["id"])
        return copy.deepcopy(record)

    def update(self, record_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        record = self._find(record_id)
        if record is None:
            return None
        record.update(copy.deepcopy(data))
        record["id"] = record_id
        return copy.deepcopy(record)

    def delete(self, record_id: str) -> Optional[Dict[str, Any]]:
        record = self._find(record_id)
        if record is None:
            return None
        self._records.remove(record)
        return record

    def clear(self) -> None:
        self._records.clear()
        self._next_id = 1
