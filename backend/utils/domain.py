"""도메인 정규화/검증 유틸리티."""
import re
from urllib.parse import urlsplit

from core.exceptions import InvalidDomainError, NoDomainsProvidedError

MAX_HOSTNAME_LENGTH = 253
MAX_LABEL_LENGTH = 63

# http(s):// 로 시작하면 URL 로 파싱, 아니면 호스트명 후보로 취급
_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_LABEL_RE = re.compile(r"[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?", re.IGNORECASE)
# 알파벳 TLD 또는 IDN(ACE) TLD
_TLD_RE = re.compile(r"[a-z]{2,24}|xn--[a-z0-9-]{2,}", re.IGNORECASE)


def is_valid_hostname(host: str) -> bool:
    """호스트명 문법 검증.

    - 전체 길이 253자 이하
    - 최소 하나의 '.' 포함 (TLD 필수, localhost 등은 거부)
    - 각 라벨은 1~63자, 영숫자로 시작/끝, 내부는 영숫자 또는 '-'
    - 마지막 라벨(TLD)은 2~24자 알파벳 또는 xn-- 형식
    """
    if not host or len(host) > MAX_HOSTNAME_LENGTH:
        return False
    if "." not in host:
        return False

    labels = host.split(".")
    for label in labels:
        if not label or len(label) > MAX_LABEL_LENGTH:
            return False
        if not _LABEL_RE.fullmatch(label):
            return False

    return bool(_TLD_RE.fullmatch(labels[-1]))


def _extract_hostname(candidate: str) -> str:
    url = candidate if _SCHEME_RE.match(candidate) else f"https://{candidate}"
    parts = urlsplit(url)
    host = parts.hostname
    if not host:
        raise ValueError("no hostname")
    # 숫자가 아닌 포트는 .port 접근 시 ValueError
    if parts.port is not None and not 0 < parts.port <= 65535:
        raise ValueError(f"invalid port: {parts.port}")
    # 비ASCII 라벨은 punycode(xn--)로 변환
    return host.encode("idna").decode("ascii").lower()


def normalize_domain(value: str) -> str:
    """사용자 입력을 정규화된 호스트명으로 변환합니다.

    Args:
        value: 도메인 또는 URL (예: "HTTPS://WWW.Example.com/path")

    Returns:
        소문자, www. 제거된 호스트명 (예: "example.com")

    Raises:
        InvalidDomainError: 유효한 호스트명으로 만들 수 없을 때
    """
    candidate = (value or "").strip()
    if not candidate:
        raise InvalidDomainError(value, "Domain cannot be empty")

    try:
        host = _extract_hostname(candidate)
    except (ValueError, UnicodeError):
        raise InvalidDomainError(value)

    if host.startswith("www."):
        host = host[len("www."):]

    if not is_valid_hostname(host):
        raise InvalidDomainError(value)

    return host


def parse_domain_list(raw: str) -> list[str]:
    """쉼표로 구분된 도메인 문자열을 정규화된 도메인 목록으로 변환.

    빈 항목은 무시하고, 중복은 처음 등장한 순서대로 한 번만 남깁니다.
    하나라도 정규화에 실패하면 InvalidDomainError 가 그대로 전파됩니다.
    """
    domains: list[str] = []
    for piece in (raw or "").split(","):
        piece = piece.strip()
        if not piece:
            continue
        domain = normalize_domain(piece)
        if domain not in domains:
            domains.append(domain)

    if not domains:
        raise NoDomainsProvidedError()
    return domains
