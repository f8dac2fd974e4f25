"""Sharing trigger API resource."""

import falcon.asgi

from scopeguard.application.use_cases.sharing.add_sharing_trigger import (
    AddSharingTriggerUseCase,
)
from scopeguard.domain.entities import Rule
from scopeguard.domain.exceptions import ValidationError


class SharingTriggersResource:
    """POST /v1/sharings/{sharing_id}/triggers - watch the documents of a shared rule."""

    def __init__(self, add_sharing_trigger: AddSharingTriggerUseCase) -> None:
        self._add = add_sharing_trigger

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        sharing_id: str,
    ) -> None:
        body = await req.get_media(default_when_empty=None)
        try:
            if not isinstance(body, dict):
                raise ValidationError("Request body must be a JSON object")
            domain = body.get("domain")
            if not isinstance(domain, str) or not domain:
                raise ValidationError("Missing required field: domain")
            rule_data = body.get("rule")
            if not isinstance(rule_data, dict):
                raise ValidationError("Missing required field: rule")
            rule = Rule.from_dict(rule_data)
            deletions_only = body.get("deletions_only", False)
            if not isinstance(deletions_only, bool):
                raise ValidationError("deletions_only must be a boolean")
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        trigger = await self._add.execute(
            domain,
            sharing_id,
            rule,
            deletions_only=deletions_only,
        )
        resp.media = {
            "id": trigger.id,
            "type": trigger.type,
            "worker_type": trigger.worker_type,
            "arguments": trigger.arguments,
            "message": trigger.message,
        }
        resp.status = falcon.HTTP_201
