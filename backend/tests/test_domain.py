"""도메인 정규화 테스트."""
import pytest

from core.exceptions import InvalidDomainError, NoDomainsProvidedError
from utils.domain import is_valid_hostname, normalize_domain, parse_domain_list


class TestNormalizeDomain:
    """normalize_domain 테스트."""

    def test_url_with_scheme_and_www(self):
        assert normalize_domain("HTTPS://WWW.Example.com/path") == "example.com"

    def test_plain_domain(self):
        assert normalize_domain("  github.com ") == "github.com"

    def test_url_with_port_and_query(self):
        assert normalize_domain("http://sub.example.co.uk:8080/a?b=c") == "sub.example.co.uk"

    def test_non_http_scheme_not_treated_as_url(self):
        with pytest.raises(InvalidDomainError):
            normalize_domain("ftp://example.com")

    def test_valid_port_ignored(self):
        assert normalize_domain("example.com:8080") == "example.com"

    def test_only_one_www_stripped(self):
        assert normalize_domain("www.www.example.com") == "www.example.com"

    def test_idempotent(self):
        once = normalize_domain("https://www.Wikipedia.org/wiki")
        assert normalize_domain(once) == once == "wikipedia.org"

    def test_unicode_domain_to_punycode(self):
        assert normalize_domain("bücher.de") == "xn--bcher-kva.de"

    def test_idn_tld_allowed(self):
        assert normalize_domain("example.xn--p1ai") == "example.xn--p1ai"

    def test_not_a_domain(self):
        with pytest.raises(InvalidDomainError) as exc:
            normalize_domain("not a domain")
        assert exc.value.domain == "not a domain"
        assert exc.value.message == "Invalid domain: not a domain"

    def test_localhost_rejected(self):
        """TLD 없는 호스트명은 거부."""
        with pytest.raises(InvalidDomainError):
            normalize_domain("localhost")

    def test_empty(self):
        with pytest.raises(InvalidDomainError) as exc:
            normalize_domain("   ")
        assert exc.value.message == "Domain cannot be empty"

    @pytest.mark.parametrize(
        "value",
        [
            "-bad.com",
            "bad-.com",
            "example..com",
            "example.c0m",
            "example.c",
            f"{'a' * 64}.com",
            "example.com:abc",
            "example.com:0",
            "https://example.com:99999/",
            "exa_mple.com",
        ],
    )
    def test_invalid_hostnames(self, value):
        with pytest.raises(InvalidDomainError):
            normalize_domain(value)


class TestIsValidHostname:
    """is_valid_hostname 테스트."""

    def test_max_length(self):
        label = "a" * 63
        host = ".".join([label, label, label, "a" * 57, "com"])
        assert len(host) == 253
        assert is_valid_hostname(host)
        assert not is_valid_hostname("a" + host)

    def test_tld_too_long(self):
        assert is_valid_hostname(f"example.{'a' * 24}")
        assert not is_valid_hostname(f"example.{'a' * 25}")


class TestParseDomainList:
    """parse_domain_list 테스트."""

    def test_empty_string(self):
        with pytest.raises(NoDomainsProvidedError):
            parse_domain_list("")

    def test_only_separators(self):
        with pytest.raises(NoDomainsProvidedError):
            parse_domain_list(" , ,, ")

    def test_empty_pieces_ignored(self):
        assert parse_domain_list("a.com,,b.com") == parse_domain_list("a.com,b.com") == ["a.com", "b.com"]

    def test_duplicates_collapsed_in_order(self):
        assert parse_domain_list("b.com, https://www.A.com, a.com,B.COM") == ["b.com", "a.com"]

    def test_invalid_domain_fails_whole_list(self):
        with pytest.raises(InvalidDomainError) as exc:
            parse_domain_list("google.com,localhost")
        assert exc.value.domain == "localhost"
