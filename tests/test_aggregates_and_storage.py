from bson import ObjectId
from gridfs.errors import NoFile

from labourconnect.core.result import Failure, NotFound, Ok
from labourconnect.services import aggregate_service
from labourconnect.services.storage_service import ProfilePictureStorage


async def test_area_aggregate_upserts_and_increments(db):
    await aggregate_service.upsert_area_aggregate("Andheri East")
    await aggregate_service.upsert_area_aggregate("andheri east")
    await aggregate_service.upsert_area_aggregate("Bandra")

    result = await aggregate_service.list_areas()

    assert isinstance(result, Ok)
    assert [(a["id"], a["workerCount"]) for a in result.value] == [("andheri-east", 2), ("bandra", 1)]


async def test_blank_area_is_rejected(db):
    result = await aggregate_service.upsert_area_aggregate("  ")

    assert isinstance(result, Failure)
    assert await db.areas.count_documents({}) == 0


async def test_profession_listing_is_limited_and_sorted(db):
    for code in ["plumber", "mason", "mason", "welder", "mason", "plumber"]:
        await aggregate_service.upsert_profession_aggregate(code)

    result = await aggregate_service.list_professions(limit=2)

    assert [(p["id"], p["workerCount"]) for p in result.value] == [("mason", 3), ("plumber", 2)]
    assert result.value[0]["name"] == "Mason (Mistri)"


async def test_platform_stats(db):
    await db.workers.insert_many([
        {"isActive": True, "rating": 4.0, "jobsCompleted": 10},
        {"isActive": True, "rating": 0, "jobsCompleted": 0},
        {"isActive": False, "rating": 5.0, "jobsCompleted": 50},
    ])
    await db.users.insert_one({"userType": "worker", "isActive": True, "rating": 5.0, "jobsCompleted": 3})
    await aggregate_service.upsert_area_aggregate("Noida")

    result = await aggregate_service.get_platform_stats()

    assert result.value == {"totalWorkers": 3, "totalAreas": 1, "totalJobs": 13, "avgRating": 4.5}


def test_demo_platform_stats():
    stats = aggregate_service.demo_platform_stats([
        {"area": "Mumbai", "rating": 4.5, "jobsCompleted": 25},
        {"area": "Delhi", "rating": 4.0, "jobsCompleted": 15},
    ])
    assert stats == {"totalWorkers": 2, "totalAreas": 2, "totalJobs": 40, "avgRating": 4.2}


class FakeGridOut:
    def __init__(self, data, metadata):
        self._data = data
        self.metadata = metadata

    async def read(self):
        return self._data


class FakeFile:
    def __init__(self, file_id):
        self._id = file_id


class FakeCursor:
    def __init__(self, files):
        self._files = iter(files)

    def __aiter__(self):
        return self

    async def __anext__(self):
        try:
            return next(self._files)
        except StopIteration:
            raise StopAsyncIteration


class FakeBucket:
    """Enough of AsyncIOMotorGridFSBucket for the storage service."""

    def __init__(self):
        self.files = {}

    async def upload_from_stream(self, filename, data, metadata=None):
        file_id = ObjectId()
        self.files[file_id] = (filename, data, metadata)
        return file_id

    def find(self, query):
        return FakeCursor([
            FakeFile(file_id) for file_id, (filename, _, _) in list(self.files.items())
            if filename == query["filename"] and file_id != query["_id"]["$ne"]
        ])

    async def delete(self, file_id):
        del self.files[file_id]

    async def open_download_stream_by_name(self, filename):
        matches = [(data, metadata) for name, data, metadata in self.files.values() if name == filename]
        if not matches:
            raise NoFile(filename)
        data, metadata = matches[-1]
        return FakeGridOut(data, metadata)


async def test_upload_replaces_previous_picture():
    bucket = FakeBucket()
    storage = ProfilePictureStorage(bucket_factory=lambda: bucket)

    first = await storage.upload("u1", b"old", "image/jpeg")
    second = await storage.upload("u1", b"new", "image/png")

    assert first.value["url"] == second.value["url"] == "/media/profile-pictures/u1"
    assert len(bucket.files) == 1

    downloaded = await storage.download("u1")
    assert downloaded.value == (b"new", "image/png")


async def test_missing_picture_is_not_found():
    storage = ProfilePictureStorage(bucket_factory=FakeBucket)

    assert isinstance(await storage.download("nobody"), NotFound)


async def test_storage_errors_become_failures():
    def broken():
        raise RuntimeError("Database not initialized")

    storage = ProfilePictureStorage(bucket_factory=broken)

    result = await storage.upload("u1", b"data", "image/png")
    assert isinstance(result, Failure)
