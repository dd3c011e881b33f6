"""学科名称比较规则。

全系统统一使用"去首尾空白 + casefold"的比较方式，
管理员分配教师与前端筛选保持一致。
"""

from typing import Iterable, List


def normalize_subject(subject: str) -> str:
    return subject.strip().casefold()


def teaches_subject(teacher_subjects: Iterable[str], subject: str) -> bool:
    """判断教师的学科列表中是否包含指定学科。"""

    wanted = normalize_subject(subject)
    return any(normalize_subject(s) == wanted for s in teacher_subjects)


def clean_subject_list(subjects: Iterable[str]) -> List[str]:
    """去掉空白项与重复项，保留首次出现的写法与顺序。"""

    seen = set()
    cleaned: List[str] = []
    for subject in subjects:
        value = subject.strip()
        if not value:
            continue
        key = normalize_subject(value)
        if key in seen:
            continue
        seen.add(key)
        cleaned.append(value)
    return cleaned


def canonical_subject(known_subjects: Iterable[str], subject: str) -> str:
    """返回列表中与之匹配的写法，没有匹配时返回去空白后的原值。"""

    wanted = normalize_subject(subject)
    for known in known_subjects:
        if normalize_subject(known) == wanted:
            return known
    return subject.strip()
