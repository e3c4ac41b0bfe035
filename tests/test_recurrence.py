"""Unit tests for recurring-instance collapsing."""
from conftest import FakeCalendarClient, make_event

from calendar_mirror.errors import RemoteError
from calendar_mirror.sync.recurrence import RecurrenceResolver


def instance(event_id, master_id, start):
    return make_event(event_id, 'Weekly sync', start=start, end=start, recurring_event_id=master_id)


def test_non_recurring_events_pass_through():
    client = FakeCalendarClient('source')
    events = [make_event('e1'), make_event('e2', 'Lunch')]

    resolved = RecurrenceResolver(client).resolve(events)

    assert [e.id for e in resolved] == ['e1', 'e2']
    assert client.get_calls == []


def test_instances_collapse_to_single_master():
    master = make_event('m1', 'Weekly sync')
    client = FakeCalendarClient('source', masters={'m1': master})
    events = [
        instance('m1_1', 'm1', '2030-01-07T09:00:00Z'),
        instance('m1_2', 'm1', '2030-01-14T09:00:00Z'),
        instance('m1_3', 'm1', '2030-01-21T09:00:00Z'),
    ]
    resolver = RecurrenceResolver(client)

    resolved = resolver.resolve(events)

    assert [e.id for e in resolved] == ['m1']
    assert resolver.collapsed == 2
    assert resolver.dropped == 0


def test_master_keeps_first_seen_position():
    client = FakeCalendarClient('source', masters={'m1': make_event('m1', 'Weekly sync')})
    events = [
        make_event('e1'),
        instance('m1_1', 'm1', '2030-01-07T10:00:00Z'),
        make_event('e2', 'Lunch'),
        instance('m1_2', 'm1', '2030-01-14T10:00:00Z'),
    ]

    resolved = RecurrenceResolver(client).resolve(events)

    assert [e.id for e in resolved] == ['e1', 'm1', 'e2']


def test_missing_master_drops_instance():
    client = FakeCalendarClient('source')
    resolver = RecurrenceResolver(client)

    resolved = resolver.resolve([instance('x_1', 'x', '2030-01-07T09:00:00Z'), make_event('e1')])

    assert [e.id for e in resolved] == ['e1']
    assert resolver.dropped == 1


def test_failed_master_lookup_is_not_fatal():
    client = FakeCalendarClient('source', masters={'m1': make_event('m1')})
    client.fail_on.add('get')
    resolver = RecurrenceResolver(client)

    resolved = resolver.resolve([
        instance('m1_1', 'm1', '2030-01-07T09:00:00Z'),
        instance('m1_2', 'm1', '2030-01-14T09:00:00Z'),
        make_event('e2'),
    ])

    assert [e.id for e in resolved] == ['e2']
    assert resolver.dropped == 2


def test_failed_lookup_is_retried_for_next_instance():
    client = FakeCalendarClient('source', masters={'m1': make_event('m1', 'Weekly sync')})
    lookup = client.get_event
    failures = [RemoteError('source events.get', 'backend error')]

    def flaky_get_event(event_id):
        if failures:
            client.get_calls.append(event_id)
            raise failures.pop()
        return lookup(event_id)

    client.get_event = flaky_get_event
    resolver = RecurrenceResolver(client)

    resolved = resolver.resolve([
        instance('m1_1', 'm1', '2030-01-07T09:00:00Z'),
        instance('m1_2', 'm1', '2030-01-14T09:00:00Z'),
        instance('m1_3', 'm1', '2030-01-21T09:00:00Z'),
    ])

    assert [e.id for e in resolved] == ['m1']
    assert client.get_calls == ['m1', 'm1']
    assert resolver.dropped == 1
    assert resolver.collapsed == 1


def test_master_is_fetched_once_per_series():
    client = FakeCalendarClient('source', masters={'m1': make_event('m1')})

    RecurrenceResolver(client).resolve([
        instance('m1_1', 'm1', '2030-01-07T09:00:00Z'),
        instance('m1_2', 'm1', '2030-01-14T09:00:00Z'),
    ])

    assert client.get_calls == ['m1']
