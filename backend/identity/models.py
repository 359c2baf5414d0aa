# identity/models.py
# -*- coding: utf-8 -*-

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from common.normalize import normalize_namespace, GUEST_NAMESPACE

# 命名空间字段优先级：内部 id → 外部 id → email → username
IDENTITY_FIELDS = ("_id", "id", "email", "username")


@dataclass
class Identity:
    """
    外部认证模块写入的当前用户（只读）。
    Chat 引擎只关心 IDENTITY_FIELDS 里的几个标识字段，其余字段原样保留在 raw 中。
    """
    internal_id: Optional[str] = None
    external_id: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Any) -> Optional["Identity"]:
        """非 dict 视为无身份；字段缺失/类型不对只忽略该字段。"""
        if not isinstance(record, dict):
            return None
        values = [normalize_namespace(record.get(name)) or None for name in IDENTITY_FIELDS]
        return cls(
            internal_id=values[0],
            external_id=values[1],
            email=values[2],
            username=values[3],
            raw=dict(record),
        )

    def identifying_fields(self) -> List[str]:
        """按优先级返回非空标识（已小写，去重）"""
        out: List[str] = []
        for v in (self.internal_id, self.external_id, self.email, self.username):
            if v and v not in out:
                out.append(v)
        return out

    @property
    def namespace(self) -> str:
        fields = self.identifying_fields()
        return fields[0] if fields else GUEST_NAMESPACE
