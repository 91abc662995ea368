import uvicorn
from dotenv import find_dotenv, load_dotenv

env_path = find_dotenv()
if env_path:
    load_dotenv(env_path, override=False)

from guestlist.core.config import settings  # noqa: E402

if __name__ == "__main__":
    uvicorn.run(
        "guestlist.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_config=None,
    )
