from dataclasses import asdict, fields
from typing import Self

class GoogleWorkSpaceResourceBase():
    """
    Mixin for the dataclass resource structs.  The GWS client wants and returns
    plain dicts so most of the work here is getting between the two.
    """
    @classmethod
    def from_dict(cls, data: dict|None) -> Self:
        """
        Build from a response dict.  Responses carry plenty of keys we don't model
        and a dataclass __init__ would choke on them, so only known fields pass.
        """
        if not data:
            return cls()
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in dict(data).items() if k in names})

    def to_base(self) -> dict:
        """
        Dict representation as needed by the GWS client, after fixup()
        has put every field in the right format.
        """
        self.fixup()
        return asdict(self)

    def fixup(self) -> None:
        """notify a subclass to do any field adjustments"""
        pass
