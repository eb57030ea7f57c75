import json
from collections import defaultdict
from datetime import datetime, timedelta
import logging

logger = logging.getLogger(__name__)

WINDOWS = {"second": 1, "minute": 60, "hour": 3600, "day": 86400}

def parse_rate_limit(rate_limit_str: str):
    """Parse strings such as "100 per minute" into (limit, seconds)."""
    try:
        limit, per = rate_limit_str.split(" per ")
        return int(limit), WINDOWS.get(per.strip(), 60)
    except (ValueError, AttributeError):
        logger.error(f"Invalid RATE_LIMIT format: {rate_limit_str}, defaulting to 100 per minute")
        return 100, 60

class RateLimiter:
    def __init__(self, limit, per_seconds):
        self.limit = limit
        self.per_seconds = per_seconds
        self.requests = defaultdict(list)

    async def is_allowed(self, client_ip, now=None):
        now = now or datetime.utcnow()
        # Remove requests older than the time window
        self.requests[client_ip] = [
            timestamp for timestamp in self.requests[client_ip]
            if now - timestamp < timedelta(seconds=self.per_seconds)
        ]
        # Check if request count exceeds limit
        if len(self.requests[client_ip]) >= self.limit:
            logger.warning(f"Rate limit exceeded for IP {client_ip}: {len(self.requests[client_ip])} requests")
            return False
        # Add new request timestamp
        self.requests[client_ip].append(now)
        return True

class RateLimitMiddleware:
    def __init__(self, app, rate_limit_str: str = "100 per minute"):
        self.app = app
        limit, per = parse_rate_limit(rate_limit_str)
        self.rate_limiter = RateLimiter(limit, per)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        client = scope.get("client") or ("unknown",)
        client_ip = client[0]

        if not await self.rate_limiter.is_allowed(client_ip):
            body = json.dumps({"error": "Rate limit exceeded"}).encode()
            await send({
                "type": "http.response.start",
                "status": 429,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"content-length", str(len(body)).encode()),
                    (b"retry-after", str(self.rate_limiter.per_seconds).encode()),
                ],
            })
            await send({"type": "http.response.body", "body": body})
            return

        await self.app(scope, receive, send)
