from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal


class OptionsModel(BaseModel):
    """ Base for all hive definition option groups.

    Attributes are snake_case in Python and PascalCase in documents
    (Network.PublicSubnet, HiveFS.OSDDriveSize, ...).
    """

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="forbid",
    )
