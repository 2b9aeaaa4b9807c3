from aiohttp import BasicAuth
from pydantic import AnyHttpUrl
from pydantic import BaseModel
from pydantic import ConfigDict

__all__ = ["ClientSettings"]


DEFAULT_URL = "https://v3.recurly.com"
# The API version the resource schemas were written against
API_VERSION = "v2019-10-10"


class ClientSettings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    url: AnyHttpUrl = DEFAULT_URL
    api_key: str
    api_version: str = API_VERSION
    timeout: float = 5.0  # in seconds
    retries: int = 0
    backoff_factor: float = 1.0

    def headers(self) -> dict[str, str]:
        return {
            "Accept": f"application/vnd.recurly.{self.api_version}",
            "Authorization": BasicAuth(self.api_key, "").encode(),
        }
