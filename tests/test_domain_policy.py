from nexuslookup.config.schema import InternetSettings
from nexuslookup.lookup.models import SearchResult
from nexuslookup.lookup.policy import DomainPolicy, extract_hostname, is_allowed
from nexuslookup.lookup.settings import SettingsStore


def test_blocked_domain_rejected() -> None:
    assert is_allowed("http://malware-site.com/x", InternetSettings()) is False


def test_blocked_match_is_substring_of_hostname() -> None:
    assert is_allowed("https://cdn.malware-site.com.evil.example/", InternetSettings()) is False


def test_unparsable_url_fails_closed() -> None:
    settings = InternetSettings()
    assert is_allowed("not a url", settings) is False
    assert is_allowed("", settings) is False
    assert is_allowed("http://[::1", settings) is False
    assert is_allowed("mailto:someone@example.com", settings) is False


def test_open_policy_accepts_other_hosts() -> None:
    assert is_allowed("https://example.com", InternetSettings()) is True


def test_allow_list_restricts_hosts() -> None:
    settings = InternetSettings(allowed_domains={"wikipedia.org"})

    assert is_allowed("https://en.wikipedia.org/wiki/Rust", settings) is True
    assert is_allowed("https://example.com", settings) is False


def test_block_list_wins_over_allow_list() -> None:
    settings = InternetSettings(allowed_domains={"example.com"}, blocked_domains={"bad.example.com"})
    assert is_allowed("https://bad.example.com/page", settings) is False


def test_extract_hostname_lowercases() -> None:
    assert extract_hostname("https://EN.Wikipedia.org./wiki") == "en.wikipedia.org"


def test_policy_reads_store_on_every_call() -> None:
    store = SettingsStore()
    policy = DomainPolicy(store)
    assert policy.is_allowed("https://news.example.com") is True

    store.update(blocked_domains={"news.example.com"})
    assert policy.is_allowed("https://news.example.com") is False


def test_policy_filter_drops_disallowed_results() -> None:
    policy = DomainPolicy(SettingsStore())
    results = [
        SearchResult(title="a", url="https://example.com/a"),
        SearchResult(title="b", url="https://malware-site.com/b"),
        SearchResult(title="c", url="garbage"),
    ]

    assert [r.title for r in policy.filter(results)] == ["a"]
