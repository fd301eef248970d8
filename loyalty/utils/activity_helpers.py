# loyalty/utils/activity_helpers.py

from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.constants.activity_codes import ActivityCode
from loyalty.constants.activity_templates import ACTIVITY_TEMPLATES
from loyalty.models.support.activity_models import UserActivity


def render_activity(code: ActivityCode, **context) -> str:
    template = ACTIVITY_TEMPLATES.get(code)
    if template is None:
        raise ValueError(f"No activity template for {code}")
    try:
        return template.format(**context)
    except KeyError as exc:
        raise ValueError(f"Activity {code} is missing context key {exc.args[0]!r}") from exc


async def record_user_activity(db: AsyncSession, user, code: ActivityCode, **context) -> None:
    """
    Stage an audit row describing what ``user`` just did.

    The row is only added to the session; it is committed together with the
    change it describes.
    """
    message = render_activity(
        code,
        actor_role=user.role.capitalize(),
        actor_email=user.username,
        **context,
    )
    db.add(
        UserActivity(
            user_id=user.id,
            username_snapshot=user.username,
            message=message,
        )
    )
