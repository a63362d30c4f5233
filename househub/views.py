from django.http import JsonResponse
from django.utils import timezone


def health(request):
    return JsonResponse({
        "success": True,
        "message": "HouseHub API is running",
        "timestamp": timezone.now().isoformat(),
    })
