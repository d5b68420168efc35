import pytest

from labourconnect.core.result import Ok
from labourconnect.schemas.worker import WorkerSearch
from labourconnect.services import directory_service, worker_service

WORKERS = [
    {"fullName": "A", "area": "Mumbai", "profession": "electrician", "experience": "5-10", "dailyRate": 1000, "isVerified": True},
    {"fullName": "B", "area": "Mumbai", "profession": "electrician", "experience": "1-3", "dailyRate": 600, "isVerified": False},
    {"fullName": "C", "area": "Mumbai", "profession": "plumber", "experience": "5-10", "dailyRate": 900, "isVerified": True},
    {"fullName": "D", "area": "Pune", "profession": "electrician", "experience": "5-10", "dailyRate": 1200, "isVerified": True},
    {"fullName": "E", "area": "Mumbai", "profession": "electrician", "experience": "5-10", "dailyRate": None, "isVerified": True},
    {"fullName": "F", "area": "Mumbai", "profession": "electrician", "experience": "5-10", "dailyRate": "800", "isVerified": True},
]


def names(workers):
    return sorted(w["fullName"] for w in workers)


@pytest.mark.parametrize(
    "search, expected",
    [
        (WorkerSearch(), ["A", "B", "C", "D", "E", "F"]),
        (WorkerSearch(experience="5-10"), ["A", "C", "D", "E", "F"]),
        (WorkerSearch(minRate=800), ["A", "C", "D"]),
        (WorkerSearch(maxRate=900), ["B", "C"]),
        (WorkerSearch(minRate=700, maxRate=1000, verifiedOnly=True), ["A", "C"]),
    ],
)
def test_client_filters(search, expected):
    assert names(directory_service.apply_client_filters(WORKERS, search)) == expected


def test_workers_without_numeric_rate_fail_rate_bounds():
    search = WorkerSearch(minRate=0)
    assert names(directory_service.apply_client_filters(WORKERS, search)) == ["A", "B", "C", "D"]


async def test_server_then_client_filters_match_full_scan(db):
    for n, worker in enumerate(WORKERS):
        await worker_service.add_worker({**worker, "mobile": f"98765432{n:02d}"}, "0" * 24)

    search = WorkerSearch(area="Mumbai", profession="electrician", experience="5-10", minRate=500)

    result = await directory_service.search_workers(search)

    everything = (await worker_service.list_workers({})).value["workers"]
    full_scan = [
        w for w in everything
        if directory_service.matches_server_filters(w, search.server_filters())
        and directory_service.matches_client_filters(w, search)
    ]
    assert isinstance(result, Ok)
    assert result.value["demo"] is False
    assert names(result.value["workers"]) == names(full_scan) == ["A"]


async def test_inactive_workers_are_hidden(db):
    added = await worker_service.add_worker({**WORKERS[0], "mobile": "9876543200"}, "0" * 24)
    await worker_service.delete_worker(added.value["workerId"])

    result = await directory_service.search_workers(WorkerSearch())
    assert result.value["count"] == 0


async def test_demo_mode_searches_demo_workers(demo_mode):
    result = await directory_service.search_workers(WorkerSearch(profession="electrician"))

    assert result.value["demo"] is True
    assert [w["fullName"] for w in result.value["workers"]] == ["Rajesh Kumar"]


async def test_demo_mode_verified_only(demo_mode):
    result = await directory_service.search_workers(WorkerSearch(verifiedOnly=True))
    assert names(result.value["workers"]) == ["Mohan Singh", "Rajesh Kumar"]
