from typing import Iterable, List


def dedupe(values: Iterable) -> List:
    """去重并保持原有顺序（用于标签、题材、平台等集合字段）"""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
