"""Helper functions for asset tests."""


def make_record(**overrides) -> dict:
    """Wire form of a stored asset, as the metadata API returns it."""
    record = {
        "status": "pending",
        "originalFilePath": "local/video.mp4",
        "provider": "mux",
        "providerMetadata": {},
        "createdAt": 1_700_000_000_000,
        "updatedAt": 1_700_000_000_000,
    }
    record.update(overrides)
    return record
