from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loyalty.core.db import AsyncSessionLocal

from loyalty.services.auth.token_cleanup_service import purge_stale_refresh_tokens

scheduler = AsyncIOScheduler()

@scheduler.scheduled_job("cron", hour=0, minute=15)  # daily @ 00:15
async def refresh_token_cleanup_job():
    async with AsyncSessionLocal() as db:
        await purge_stale_refresh_tokens(db)
