from typing import Any

from clawapi.core.container import GatewayState

# Fixed creation timestamp reported for every synthesized model entry
MODEL_CREATED = 1677610602


def list_models(state: GatewayState) -> dict[str, Any]:
    """Two addressable ids per catalogued provider: namespaced and bare."""
    data = []
    for descriptor in state.registry.list_all():
        base_model = {
            "object": "model",
            "created": MODEL_CREATED,
            "owned_by": state.model_prefix,
            "provider": descriptor.name,
            "display_name": descriptor.display_name,
            "vendor": descriptor.vendor,
            "active": state.runtime.is_active(descriptor.name),
            "authenticated": state.sessions.validate(descriptor.name),
        }
        data.append({"id": f"{state.model_prefix}/{descriptor.name}", **base_model})
        data.append({"id": descriptor.name, **base_model})
    return {"object": "list", "data": data}
