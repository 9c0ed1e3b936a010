from django.utils import timezone
from rest_framework.renderers import JSONRenderer


def build_envelope(data, status_code, meta=None):
    envelope = {
        "success": status_code < 400,
        "meta": {"timestamp": timezone.now().isoformat(), **(meta or {})},
    }
    if envelope["success"]:
        envelope["data"] = data
    else:
        envelope["error"] = data
    return envelope


class EnvelopeJSONRenderer(JSONRenderer):
    """Wraps every API payload as ``{success, data|error, meta}``"""

    def render(self, data, accepted_media_type=None, renderer_context=None):
        renderer_context = renderer_context or {}
        response = renderer_context.get("response")

        if response is None or getattr(response, "envelope_skip", False):
            return super().render(data, accepted_media_type, renderer_context)

        meta = getattr(response, "envelope_meta", None)
        if isinstance(data, dict) and "results" in data and "count" in data:
            # Paginated list responses carry their paging info in meta
            meta = {
                **(meta or {}),
                "count": data["count"],
                "next": data.get("next"),
                "previous": data.get("previous"),
            }
            data = data["results"]

        envelope = build_envelope(data, response.status_code, meta)
        return super().render(envelope, accepted_media_type, renderer_context)
