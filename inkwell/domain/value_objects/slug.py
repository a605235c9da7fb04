import re

_NON_WORD = re.compile(r"[^\w -]+")
_SEPARATORS = re.compile(r"[ -]+")


def derive_slug(title: str) -> str:
    """제목에서 URL 슬러그를 만든다.

    소문자 변환 → 단어 문자/공백/하이픈 이외 제거 → 연속된 공백(과 하이픈)을 하이픈 하나로.
    기존 하이픈을 보존하므로 derive_slug(derive_slug(t)) == derive_slug(t).
    순수 함수이며 실패하지 않는다. 결과가 빈 문자열일 수 있다.
    """
    slug = title.lower()
    slug = _NON_WORD.sub("", slug)
    return _SEPARATORS.sub("-", slug)
