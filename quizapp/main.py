import uvicorn

from . import app
from .config import settings

def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    run()
