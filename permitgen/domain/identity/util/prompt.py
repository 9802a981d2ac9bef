from permitgen.domain.identity.model.record import IdentityRecord
from permitgen.domain.identity.util.formatting import format_number

PHOTO_PROMPT_TEMPLATE = (
    "Professional passport photograph of a {age}-year-old {gender} person of "
    "{nationality} descent. Neutral facial expression, looking directly at the camera. "
    "Plain, solid light-grey background. Centered, head and shoulders view. "
    "High detail, photorealistic. No smiling, no glasses, no hats, no accessories."
)


def build_prompt(record: IdentityRecord) -> str:
    return PHOTO_PROMPT_TEMPLATE.format(
        age=format_number(record.age),
        gender=record.gender,
        nationality=record.nationality,
    )
