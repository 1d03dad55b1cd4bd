import uvicorn

from journal_ledger.config import get_settings

settings = get_settings()

if __name__ == "__main__":
    uvicorn.run(
        "journal_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
