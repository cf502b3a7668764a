"""Account discovery and trackback records."""

from pydantic import BaseModel, Field


class BlogInfo(BaseModel):
    """One blog the account can post to."""

    id: str
    title: str = ""
    url: str = ""
    api_url: str = Field(default="", description="XML-RPC endpoint advertised by the server")
    summary: str = ""


class UserInfo(BaseModel):
    """Profile returned by blogger.getUserInfo."""

    userid: str = ""
    nickname: str = ""
    firstname: str = ""
    lastname: str = ""
    email: str = ""
    url: str = ""


class TrackbackPing(BaseModel):
    title: str = ""
    url: str = ""
    ip: str = ""
