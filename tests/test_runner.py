from lsdom.models.config import RunConfig, TargetMode
from lsdom.pipeline.context import RunContext
from lsdom.pipeline.runner import ReportState, aggregate, run_report
from lsdom.reporting.table import build_header

from .fakes import FakeProvider, FakeRegistry, FakeResolver, inventory


def test_aggregate_renders_header_once_and_skips_failures():
    provider = FakeProvider(
        {
            "alice": inventory(parked=["a.com"]),
            "broken": inventory(main_domain=None),
            "bob": inventory(addon=["b.net"]),
        }
    )
    lines = []
    state = ReportState()
    records = aggregate(["alice", "broken", "ghost", "bob"], provider, lines.append, state)

    assert [r.account for r in records] == ["alice", "bob"]
    assert lines[0] == build_header()
    assert lines.count(build_header()) == 1
    assert len(lines) == 3
    assert not any("broken" in line or "ghost" in line for line in lines)
    assert state.header_emitted
    assert state.skipped == ["broken", "ghost"]
    assert provider.calls == ["alice", "broken", "ghost", "bob"]


def test_aggregate_streams_rows_before_later_targets():
    lines = []

    class StreamingProvider(FakeProvider):
        def list_domains(self, account):
            if account == "second":
                assert len(lines) == 2
            return super().list_domains(account)

    provider = StreamingProvider({"first": inventory(), "second": inventory()})
    aggregate(["first", "second"], provider, lines.append)
    assert len(lines) == 3


def test_aggregate_without_records_emits_nothing():
    lines = []
    state = ReportState()
    assert aggregate(["ghost"], FakeProvider({}), lines.append, state) == []
    assert lines == []
    assert not state.has_data


def test_aggregate_is_repeatable():
    provider = FakeProvider({"alice": inventory(parked=["a.com"], subs=["www.alice.com"])})
    first, second = [], []
    aggregate(["alice"], provider, first.append)
    aggregate(["alice"], provider, second.append)
    assert first == second


def test_run_report_resolves_and_aggregates():
    context = RunContext(
        config=RunConfig(mode=TargetMode.all_accounts),
        inventory=FakeProvider({"alice": inventory(), "bob": inventory()}),
        ownership=FakeResolver({}),
        registry=FakeRegistry(["alice", "cpanel", "bob"]),
    )
    lines = []
    state = run_report(context, lines.append)
    assert state.has_data
    assert len(lines) == 3
    assert context.inventory.calls == ["alice", "bob"]
