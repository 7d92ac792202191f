from __future__ import annotations

import asyncio

import pytest

from axiom_client.application.dtos.tag_data_dto import CurrentValuesQueryDTO
from axiom_client.application.use_cases.tag_data_use_cases import (
    GetCurrentValuesUseCase,
    GetProcessedDataUseCase,
    GetRawDataUseCase,
    PaginationEngine,
)
from axiom_client.domain.entities.errors import (
    AuthenticationError,
    CancellationError,
    InvalidRequestError,
    PaginationExhaustedError,
    ServiceResponseError,
    TransportError,
)
from axiom_client.domain.entities.tag_data import extract_values
from axiom_client.domain.services.aggregator import totalize
from axiom_client.shared.consts import AxiomEndpoint

TAG_DATA = AxiomEndpoint.GET_TAG_DATA


def _three_pages(page_factory):
    return (
        page_factory({"T1": [1, 2]}, continuation="c-1"),
        page_factory({"T1": [3, 4]}, continuation="c-2"),
        page_factory({"T1": [5, 6]}),
    )


@pytest.mark.asyncio
async def test_fetch_all_merges_every_page(
    active_session, fake_transport, page_factory
) -> None:
    fake_transport.queue(TAG_DATA, *_three_pages(page_factory))
    engine = PaginationEngine(active_session)

    dataset = await engine.fetch_all(CurrentValuesQueryDTO(tags=["T1"]))

    assert extract_values(dataset.samples("T1")) == [1, 2, 3, 4, 5, 6]
    continuations = [body["continuation"] for body in fake_transport.bodies(TAG_DATA)]
    assert continuations == [None, "c-1", "c-2"]


@pytest.mark.asyncio
async def test_fetch_all_keeps_template_fields_on_every_page(
    active_session, fake_transport, page_factory
) -> None:
    fake_transport.queue(TAG_DATA, *_three_pages(page_factory))
    use_case = GetRawDataUseCase(active_session, PaginationEngine(active_session))

    await use_case.execute(["T1"], start_time="Now - 1 Hour", max_size=2)

    for body in fake_transport.bodies(TAG_DATA):
        assert body["userToken"] == "token-1"
        assert body["tags"] == ["T1"]
        assert body["startTime"] == "Now - 1 Hour"
        assert body["endTime"] == "Now"
        assert body["maxSize"] == 2


@pytest.mark.asyncio
async def test_fetch_all_aborts_on_page_error(
    active_session, fake_transport, page_factory
) -> None:
    first, _, third = _three_pages(page_factory)
    fake_transport.queue(
        TAG_DATA, first, TransportError("bad gateway", status_code=502), third
    )
    engine = PaginationEngine(active_session)

    with pytest.raises(TransportError):
        await engine.fetch_all(CurrentValuesQueryDTO(tags=["T1"]))

    assert len(fake_transport.bodies(TAG_DATA)) == 2


@pytest.mark.asyncio
async def test_fetch_all_rejects_malformed_page(active_session, fake_transport) -> None:
    fake_transport.queue(TAG_DATA, {"data": {"T1": "not-a-list"}, "continuation": None})
    engine = PaginationEngine(active_session)

    with pytest.raises(ServiceResponseError):
        await engine.fetch_all(CurrentValuesQueryDTO(tags=["T1"]))


@pytest.mark.asyncio
async def test_fetch_all_stops_at_page_limit(
    active_session, fake_transport, page_factory
) -> None:
    fake_transport.always(
        TAG_DATA, lambda body: page_factory({"T1": [1]}, continuation="again")
    )
    engine = PaginationEngine(active_session, max_pages=5)

    with pytest.raises(PaginationExhaustedError) as exc:
        await engine.fetch_all(CurrentValuesQueryDTO(tags=["T1"]))

    assert exc.value.max_pages == 5
    assert len(fake_transport.bodies(TAG_DATA)) == 5


def test_engine_rejects_non_positive_page_limit(session_manager) -> None:
    with pytest.raises(ValueError):
        PaginationEngine(session_manager, max_pages=0)


@pytest.mark.asyncio
async def test_fetch_all_fails_after_revoke_mid_fetch(
    active_session, fake_transport, page_factory
) -> None:
    fake_transport.always(
        TAG_DATA, lambda body: page_factory({"T1": [1]}, continuation="c-1")
    )
    original_post = fake_transport.post

    async def post_then_revoke(url, body=None):
        result = await original_post(url, body)
        if url.endswith(TAG_DATA.value):
            await active_session.revoke()
        return result

    fake_transport.post = post_then_revoke
    engine = PaginationEngine(active_session)

    with pytest.raises(AuthenticationError):
        await engine.fetch_all(CurrentValuesQueryDTO(tags=["T1"]))

    assert len(fake_transport.bodies(TAG_DATA)) == 1


@pytest.mark.asyncio
async def test_fetch_all_fails_after_reacquire_mid_fetch(
    active_session, fake_transport, page_factory, credentials
) -> None:
    fake_transport.always(
        TAG_DATA, lambda body: page_factory({"T1": [1, 2]}, continuation="c-1")
    )
    fake_transport.queue(AxiomEndpoint.GET_USER_TOKEN, {"userToken": "token-2"})
    original_post = fake_transport.post

    async def post_then_reacquire(url, body=None):
        result = await original_post(url, body)
        if url.endswith(TAG_DATA.value):
            await active_session.acquire(credentials)
        return result

    fake_transport.post = post_then_reacquire
    engine = PaginationEngine(active_session)

    with pytest.raises(AuthenticationError):
        await engine.fetch_all(CurrentValuesQueryDTO(tags=["T1"]))

    tokens = [body["userToken"] for body in fake_transport.bodies(TAG_DATA)]
    assert tokens == ["token-1"]
    assert active_session.current_token() == "token-2"


@pytest.mark.asyncio
async def test_fetch_all_honours_cancel_event(
    active_session, fake_transport, page_factory
) -> None:
    cancel = asyncio.Event()

    def page_then_cancel(body):
        cancel.set()
        return page_factory({"T1": [1]}, continuation="c-1")

    fake_transport.queue(TAG_DATA, page_then_cancel)
    engine = PaginationEngine(active_session)

    with pytest.raises(CancellationError):
        await engine.fetch_all(CurrentValuesQueryDTO(tags=["T1"]), cancel_event=cancel)

    assert len(fake_transport.bodies(TAG_DATA)) == 1


@pytest.mark.asyncio
async def test_fetch_all_timeout_raises_cancellation(
    active_session, fake_transport, page_factory
) -> None:
    fake_transport.always(
        TAG_DATA, lambda body: page_factory({"T1": [1]}, continuation="again")
    )
    engine = PaginationEngine(active_session, max_pages=10**9)

    with pytest.raises(CancellationError):
        await engine.fetch_all(CurrentValuesQueryDTO(tags=["T1"]), timeout=0.05)


@pytest.mark.asyncio
async def test_task_cancellation_propagates(
    active_session, fake_transport, page_factory
) -> None:
    fake_transport.always(
        TAG_DATA, lambda body: page_factory({"T1": [1]}, continuation="again")
    )
    engine = PaginationEngine(active_session, max_pages=10**9)

    task = asyncio.ensure_future(engine.fetch_all(CurrentValuesQueryDTO(tags=["T1"])))
    await asyncio.sleep(0.01)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_missing_values_preserved_and_zeroed_by_aggregator(
    active_session, fake_transport, page_factory
) -> None:
    fake_transport.queue(
        TAG_DATA,
        page_factory({"T1": [1, None]}, continuation="c-1"),
        page_factory({"T1": [3]}),
    )
    use_case = GetProcessedDataUseCase(active_session, PaginationEngine(active_session))

    dataset = await use_case.execute(["T1"], aggregate_interval="1 Hour")

    assert extract_values(dataset.samples("T1")) == [1, None, 3]
    assert dataset.samples("T1")[1].is_missing
    assert totalize(dataset, "T1", "1 Hour") == 4


@pytest.mark.asyncio
async def test_processed_data_sends_aggregate_fields(
    active_session, fake_transport, page_factory
) -> None:
    fake_transport.queue(TAG_DATA, page_factory({"T1": [1]}))
    use_case = GetProcessedDataUseCase(
        active_session, PaginationEngine(active_session), max_size=500
    )

    await use_case.execute(
        ["T1"], aggregate_name="Maximum", aggregate_interval="15 minutes"
    )

    (body,) = fake_transport.bodies(TAG_DATA)
    assert body["aggregateName"] == "Maximum"
    assert body["aggregateInterval"] == "15 minutes"
    assert body["maxSize"] == 500


@pytest.mark.asyncio
async def test_current_values_fall_back_to_default_tags(
    active_session, fake_transport, page_factory
) -> None:
    fake_transport.queue(TAG_DATA, page_factory({"A": [7], "B": [8]}))
    active_session.set_default_tags(["A", "B"])
    use_case = GetCurrentValuesUseCase(active_session, PaginationEngine(active_session))

    dataset = await use_case.execute()

    assert dataset.tags == ("A", "B")
    (body,) = fake_transport.bodies(TAG_DATA)
    assert body == {"userToken": "token-1", "tags": ["A", "B"], "continuation": None}


@pytest.mark.asyncio
async def test_empty_selection_is_a_noop(active_session, fake_transport) -> None:
    engine = PaginationEngine(active_session)

    for use_case in (
        GetCurrentValuesUseCase(active_session, engine),
        GetRawDataUseCase(active_session, engine),
        GetProcessedDataUseCase(active_session, engine),
    ):
        dataset = await use_case.execute()
        assert dataset.is_empty

    assert fake_transport.bodies(TAG_DATA) == []


@pytest.mark.asyncio
async def test_data_call_without_session_fails(session_manager, fake_transport) -> None:
    use_case = GetRawDataUseCase(session_manager, PaginationEngine(session_manager))

    with pytest.raises(AuthenticationError):
        await use_case.execute(["T1"])

    assert fake_transport.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("max_size", [0, -1])
async def test_invalid_page_size_is_a_typed_error(
    active_session, fake_transport, max_size
) -> None:
    use_case = GetRawDataUseCase(active_session, PaginationEngine(active_session))

    with pytest.raises(InvalidRequestError) as exc:
        await use_case.execute(["T1"], max_size=max_size)

    assert exc.value.details["endpoint"] == TAG_DATA.value
    assert fake_transport.bodies(TAG_DATA) == []


@pytest.mark.asyncio
async def test_non_string_tags_are_a_typed_error(active_session, fake_transport):
    use_case = GetCurrentValuesUseCase(active_session, PaginationEngine(active_session))

    with pytest.raises(InvalidRequestError):
        await use_case.execute([42])

    assert fake_transport.bodies(TAG_DATA) == []
