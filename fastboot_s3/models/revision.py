from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict


@dataclass
class Revision:
    revision: str
    timestamp: datetime
    active: bool = False

    @classmethod
    def from_s3_object(cls, revision: str, s3_object: Dict[str, Any], active_key=None):
        """
        Build a Revision from one `Contents` entry of a ListObjects response.
        It is active when the object's key is the one the manifest points at.
        """
        return cls(
            revision=revision,
            timestamp=s3_object.get("LastModified"),
            active=active_key is not None and s3_object.get("Key") == active_key,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
