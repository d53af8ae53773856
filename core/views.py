from django.db import DatabaseError, connection
from django.http import JsonResponse


def healthz(request):
    try:
        with connection.cursor() as c:
            c.execute("SELECT 1")
    except DatabaseError as e:  # pragma: no cover
        return JsonResponse({"status": "degraded", "database": str(e)}, status=503)
    return JsonResponse({"status": "ok"})
