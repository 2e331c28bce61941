from pydantic import BaseModel, Field


class SiteRules(BaseModel):
    title: str
    subtitle: str = ""
    about: str = ""


class ListingRules(BaseModel):
    page_size: int = Field(default=10, ge=1)
    recent_posts: int = Field(default=3, ge=0)
    search_limit: int = Field(default=20, ge=1)
    taxonomy_limit: int = Field(default=10, ge=1)


class RenderRules(BaseModel):
    prose_class: str = "prose"
    code_block_class: str = "code-block"
    inline_code_class: str = "inline-code"
    quote_class: str = "quote"
    divider_class: str = "divider"
    words_per_minute: int = Field(default=200, ge=1)


class OpsRules(BaseModel):
    data_dir_required: bool = True
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    site: SiteRules
    listing: ListingRules = Field(default_factory=ListingRules)
    render: RenderRules = Field(default_factory=RenderRules)
    ops: OpsRules = Field(default_factory=OpsRules)


class RenderRulesAdapter:
    """Exposes the render section through the renderer's rules port."""

    def __init__(self, rules: Rules) -> None:
        self._render = rules.render

    def get_prose_class(self) -> str:
        return self._render.prose_class

    def get_code_block_class(self) -> str:
        return self._render.code_block_class

    def get_inline_code_class(self) -> str:
        return self._render.inline_code_class

    def get_quote_class(self) -> str:
        return self._render.quote_class

    def get_divider_class(self) -> str:
        return self._render.divider_class
