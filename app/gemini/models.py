# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/20 22:05
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : generateContent request/response bodies
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Part(BaseModel):
    text: str | None = None


class Content(BaseModel):
    role: str | None = Field(default=None, description="`user` for requests, `model` for replies")
    parts: List[Part] = Field(default_factory=list)


class GenerationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temperature: float | None = None
    max_output_tokens: int | None = Field(default=None, alias="maxOutputTokens")


class GenerateContentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contents: List[Content]
    generation_config: GenerationConfig | None = Field(default=None, alias="generationConfig")

    @classmethod
    def from_prompt(cls, prompt: str, **generation_config) -> "GenerateContentRequest":
        config = GenerationConfig(**generation_config) if generation_config else None
        return cls(
            contents=[Content(role="user", parts=[Part(text=prompt)])], generation_config=config
        )

    def dumps_params(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Candidate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: Content | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")


class PromptFeedback(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    block_reason: str | None = Field(default=None, alias="blockReason")


class GenerateContentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidates: List[Candidate] = Field(default_factory=list)
    prompt_feedback: PromptFeedback | None = Field(default=None, alias="promptFeedback")

    @property
    def text(self) -> str:
        """Concatenated text parts of the first candidate, empty if there is none"""
        if not self.candidates or not self.candidates[0].content:
            return ""
        return "".join(part.text or "" for part in self.candidates[0].content.parts)

    @property
    def stop_reason(self) -> str | None:
        if self.prompt_feedback and self.prompt_feedback.block_reason:
            return f"prompt blocked: {self.prompt_feedback.block_reason}"
        if self.candidates and self.candidates[0].finish_reason:
            return f"finish reason: {self.candidates[0].finish_reason}"
        return None
