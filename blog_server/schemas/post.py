from datetime import datetime

from pydantic import BaseModel


class Post(BaseModel):
    slug: str
    title: str = ""
    content: str = ""  # Rendered HTML, inserted unescaped
    date: datetime
    preview: str = ""
