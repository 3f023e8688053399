# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
Representation of a single generation job received from the remote API.

This module defines the immutable `Job` dataclass together with helpers for
decoding raw listing pages and for serializing a job into the `job.json`
file stored in its job directory.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Self

from mjsync_lib.core.error import DecodeError


@dataclass(frozen=True)
class Job:
    """
    Dataclass storing information about a completed generation job.

    The identifier and image paths are stored exactly as received;
    validation is performed by the job processor.
    """

    # Unique identifier of the job
    id: str

    # Time the job was added to the queue
    enqueue_time: str = ""

    # URLs of the images produced by the job, in listing order
    image_paths: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def fromDict(cls, data: Any) -> Self:
        """
        Create a Job from one decoded element of a listing page.

        Unknown fields are ignored. A missing or null `id` becomes an empty
        identifier, which fails validation when the job is processed.

        Args:
            data (Any): The decoded JSON element.

        Returns:
            Job: The created job.

        Raises:
            DecodeError: If the element is not an object or its fields have the wrong type.
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a job object, got {type(data).__name__}.")

        job_id = data.get("id")
        if job_id is None:
            job_id = ""
        if not isinstance(job_id, str):
            raise DecodeError(f"Job has a non-string 'id': {data!r}.")

        enqueue_time = data.get("enqueue_time") or ""
        if not isinstance(enqueue_time, str):
            raise DecodeError(f"Job '{job_id}' has a non-string 'enqueue_time'.")

        image_paths = data.get("image_paths") or []
        if not isinstance(image_paths, list) or not all(
            isinstance(path, str) for path in image_paths
        ):
            raise DecodeError(f"Job '{job_id}' has an invalid 'image_paths' list.")

        return cls(id=job_id, enqueue_time=enqueue_time, image_paths=tuple(image_paths))

    def toDict(self) -> dict[str, Any]:
        """Return the job as a dictionary using the API field names."""
        return {
            "id": self.id,
            "enqueue_time": self.enqueue_time,
            "image_paths": list(self.image_paths),
        }

    def toJson(self) -> str:
        """Return the JSON representation of the job."""
        return json.dumps(self.toDict())


def decode_page(payload: bytes) -> list[Job]:
    """
    Decode a raw listing page into jobs, preserving listing order.

    Args:
        payload (bytes): Raw body of the listing response.

    Returns:
        list[Job]: Jobs on the page. Empty if the page is an empty array.

    Raises:
        DecodeError: If the payload is not a JSON array of job objects.
    """
    try:
        data = json.loads(payload)
    except (ValueError, TypeError) as e:
        raise DecodeError(f"Could not decode listing page: {e}.") from e

    if not isinstance(data, list):
        raise DecodeError(
            f"Expected a list of jobs, got {type(data).__name__}."
        )

    return [Job.fromDict(item) for item in data]
