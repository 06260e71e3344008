from lsdom.models.results import DomainRecord, FetchFailure
from lsdom.modules.fetch import build_record, fetch

from .fakes import FakeProvider, inventory


def test_fetch_normalizes_all_categories():
    provider = FakeProvider(
        {"alice": inventory(parked=["a.com"], addon=[], subs=["sub1.alice.com", "sub2.alice.com"])}
    )
    record = fetch("alice", provider)
    assert record == DomainRecord(
        account="alice",
        parked_domains="a.com",
        addon_domains="N/A",
        sub_domains="sub1.alice.com,sub2.alice.com",
    )
    assert provider.calls == ["alice"]


def test_fetch_joins_without_spaces_and_keeps_order():
    provider = FakeProvider({"bob": inventory(addon=["z.net", "a.net", "m.net"])})
    record = fetch("bob", provider)
    assert record.addon_domains == "z.net,a.net,m.net"
    assert record.parked_domains == "N/A"
    assert record.sub_domains == "N/A"


def test_fetch_empty_inventory_with_main_domain_still_yields_record():
    record = fetch("carol", FakeProvider({"carol": inventory()}))
    assert isinstance(record, DomainRecord)
    assert (record.parked_domains, record.addon_domains, record.sub_domains) == ("N/A", "N/A", "N/A")


def test_fetch_missing_main_domain_is_failure():
    result = fetch("dave", FakeProvider({"dave": inventory(main_domain="", parked=["x.com"])}))
    assert isinstance(result, FetchFailure)
    assert result.account == "dave"


def test_fetch_unsuccessful_status_is_failure():
    result = fetch("erin", FakeProvider({"erin": inventory(status=0)}))
    assert isinstance(result, FetchFailure)


def test_fetch_provider_error_is_failure():
    result = fetch("ghost", FakeProvider({}))
    assert isinstance(result, FetchFailure)
    assert "uapi" in result.reason


def test_fetch_malformed_payloads_are_failures():
    provider = FakeProvider(
        {
            "a": {"result": "nope"},
            "b": {"result": {"status": 1, "data": None}},
            "c": {"unexpected": True},
        }
    )
    for account in ("a", "b", "c"):
        assert isinstance(fetch(account, provider), FetchFailure)


def test_build_record_tolerates_null_lists_and_bad_sub_entries():
    data = {
        "main_domain": "alice.com",
        "parked_domains": None,
        "addon_domains": ["addon.com"],
        "sub_domains": [{"domain": "www.alice.com"}, {"basedir": "x"}, "junk"],
    }
    record = build_record("alice", data)
    assert record.parked_domains == "N/A"
    assert record.addon_domains == "addon.com"
    assert record.sub_domains == "www.alice.com"


def test_build_record_drops_null_domain_entries():
    data = {
        "main_domain": "alice.com",
        "parked_domains": [None, "p.com", ""],
        "addon_domains": [None],
        "sub_domains": [],
    }
    record = build_record("alice", data)
    assert record.parked_domains == "p.com"
    assert record.addon_domains == "N/A"
