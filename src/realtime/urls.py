REALTIME_URL = "/api/v1/realtime/{resource}"
