"""Try-on prompt composer - builds the generation request for the image model."""

from ..models import GenerationRequest, ImageAsset, InlineImage
from ..utils.data_uri import decode_data_uri, media_type_of


DEFAULT_STYLING = "Create a cohesive, high-fashion look."

TRYON_PROMPT_TEMPLATE = """Perform a photorealistic virtual try-on.
Image 1 is the PERSON.
Image 2 is the OUTFIT.

Task: Put the outfit from Image 2 onto the person in Image 1.

Requirements:
1. Do NOT change the person's pose, body shape, or facial features.
2. Maintain the exact lighting, shadows, and background environment of Image 1 (the person's image).
3. Ensure the outfit from Image 2 is accurately represented, including texture, fabric details, and accessories if present.
4. The fit should look natural and realistic, respecting the person's posture.
5. {styling}"""


class TryOnPromptComposer:
    """Builds the prompt and decoded image payloads for one try-on attempt.

    Image order matters: the prompt refers to the person as Image 1 and the
    outfit as Image 2, so the request keeps that order.
    """

    def __init__(self, default_media_type: str = "image/jpeg"):
        self.default_media_type = default_media_type

    def build_prompt(self, instructions: str | None = None) -> str:
        """Fill the fixed requirements, with the user's styling text as the last one."""
        styling = instructions.strip() if instructions and instructions.strip() else DEFAULT_STYLING
        return TRYON_PROMPT_TEMPLATE.format(styling=styling)

    def to_inline_image(self, asset: ImageAsset) -> InlineImage:
        return InlineImage(
            media_type=media_type_of(asset.data_uri, default=self.default_media_type),
            data=decode_data_uri(asset.data_uri),
        )

    def compose(
        self,
        subject: ImageAsset,
        garment: ImageAsset,
        instructions: str | None = None,
    ) -> GenerationRequest:
        """Compose the request for a person image and an outfit image.

        Args:
            subject: The person photo (Image 1)
            garment: The outfit photo (Image 2)
            instructions: Optional free-text styling, used as the final requirement

        Returns:
            GenerationRequest ready for an ImageGenerator
        """
        return GenerationRequest(
            prompt=self.build_prompt(instructions),
            subject=self.to_inline_image(subject),
            garment=self.to_inline_image(garment),
            instructions=instructions,
        )
