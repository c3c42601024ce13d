"""
Core — Response Renderer

Every successful response leaves the API as

    { "success": true, "data": ..., "meta": {...} }

which is the shape the location selector client unwraps. Error bodies
are already enveloped by core.exceptions and pass through untouched.

@file core/renderers.py
"""

from rest_framework.renderers import JSONRenderer


def wrap_success(data):
    if isinstance(data, dict) and 'success' in data:
        return data
    if isinstance(data, dict) and 'results' in data:
        meta = {key: data.get(key) for key in ('count', 'next', 'previous')}
        return {'success': True, 'data': data['results'], 'meta': meta}
    return {'success': True, 'data': data}


class StandardJSONRenderer(JSONRenderer):
    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = (renderer_context or {}).get('response')
        if response is None or response.status_code < 400:
            data = wrap_success(data)
        return super().render(data, accepted_media_type, renderer_context)
