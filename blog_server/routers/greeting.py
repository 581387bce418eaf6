from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/hello/{name:path}", response_class=PlainTextResponse)
def hello(name: str):
    return f"Hello, {name}!"
