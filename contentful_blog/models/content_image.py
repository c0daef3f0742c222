from pydantic import BaseModel, ConfigDict


class ContentImage(BaseModel):
    """Simplified image asset: only what the pages need to render an ``<img>``."""

    model_config = ConfigDict(frozen=True)

    src: str
    alt: str
    width: int
    height: int
