# rent_or_sell/inputs/inputs.py
"""
Config layer for CLI runs.

A run needs two things: the raw calculator form (text keyed by form id, exactly
as the share link carries it) and a few run options (where to write, which date
counts as today). This module reads both from JSON, validates the envelope with
Pydantic and applies RENTSELL_* environment overrides. It never repairs form
values; that is the normalizer's job (rent_or_sell.core.normalize).

Accepted JSON
-------------
Flat form at the root:
    {"purchasePrice": "300000", "loanOriginDate": "2016-05-01", ...}

Envelope:
    {
      "form": {...},
      "run": {"out": "rent_vs_sell.md", "chart": "chart.json",
              "as_of": "2026-01-15", "base_url": "https://example.com/calc"}
    }

Environment
-----------
RENTSELL_OUT, RENTSELL_CHART, RENTSELL_BASE_URL override the matching run option.
RENTSELL_AS_OF must be an ISO date; anything else is ignored.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_SEARCH: tuple[Path, ...] = (Path("data/sample/inputs.json"), Path("config.json"))

# env suffix → RunOptions field (plain strings; AS_OF handled separately)
_ENV_TEXT_FIELDS: tuple[tuple[str, str], ...] = (("OUT", "out"), ("CHART", "chart"), ("BASE_URL", "base_url"))


class RunOptions(BaseModel):
    """Non-financial options for one CLI run."""

    out: str = Field("rent_vs_sell.md", description="Path to write the Markdown report.")
    chart: str | None = Field(None, description="Optional path for the chart series JSON.")
    as_of: date | None = Field(None, description="Reference 'today' for elapsed payments; defaults to the current date.")
    base_url: str = Field("", description="Page URL used to build the share link.")


class AppInputs(BaseModel):
    """Raw form values plus run options. Form values are always strings once loaded."""

    form: dict[str, str] = Field(default_factory=dict)
    run: RunOptions = Field(default_factory=RunOptions)

    @field_validator("form", mode="before")
    @classmethod
    def _stringify_form(cls, v: Any) -> Any:
        # JSON numbers/bools are accepted; the form itself is text
        if not isinstance(v, dict):
            return v
        out: dict[str, str] = {}
        for key, val in v.items():
            if val is None:
                out[str(key)] = ""
            elif isinstance(val, bool):
                out[str(key)] = "yes" if val else "no"
            else:
                out[str(key)] = str(val)
        return out


@dataclass(frozen=True)
class InputsLoader:
    """
    Reads AppInputs from a JSON file or string.

    With no path, the first existing file in DEFAULT_SEARCH is used; if none exists
    a FileNotFoundError is raised. Malformed files raise ValueError.
    """

    env_prefix: str = "RENTSELL_"

    def load(self, path: str | Path | None = None) -> AppInputs:
        p = self._locate(path)
        if p.suffix.lower() != ".json":
            raise ValueError(f"{p.name}: only .json inputs are supported.")
        cfg = self._from_text(p.read_text(encoding="utf-8"), source=str(p))
        logger.debug("inputs: %d form fields from %s", len(cfg.form), p)
        return cfg

    def load_json(self, text: str) -> AppInputs:
        """Same as load(), for a JSON document already in memory."""
        return self._from_text(text, source="<string>")

    def with_overrides(
        self,
        cfg: AppInputs,
        *,
        out: str | None = None,
        chart: str | None = None,
        as_of: date | None = None,
        base_url: str | None = None,
        form: Mapping[str, str] | None = None,
    ) -> AppInputs:
        """
        Copy of `cfg` with every non-None run option replaced and `form` merged key
        by key. `cfg` itself is left untouched.
        """
        run_updates = {
            k: v
            for k, v in (("out", out), ("chart", chart), ("as_of", as_of), ("base_url", base_url))
            if v is not None
        }
        updated = cfg
        if run_updates:
            updated = updated.model_copy(update={"run": updated.run.model_copy(update=run_updates)})
        if form:
            updated = updated.model_copy(update={"form": {**updated.form, **form}})
        return updated

    # ---------- helpers ----------

    def _locate(self, path: str | Path | None) -> Path:
        if path is None:
            found = next((c for c in DEFAULT_SEARCH if c.exists()), None)
            if found is None:
                looked = ", ".join(f"./{c}" for c in DEFAULT_SEARCH)
                raise FileNotFoundError(f"No inputs path given and none of {looked} exist.")
            return found
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Inputs file not found: {p}")
        return p

    def _from_text(self, text: str, *, source: str) -> AppInputs:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"{source}: invalid JSON ({e})") from e
        if not isinstance(raw, dict):
            raise ValueError(f"{source}: inputs must be a JSON object.")
        return self._env_overrides(self._from_mapping(raw, source=source))

    def _from_mapping(self, raw: dict[str, Any], *, source: str) -> AppInputs:
        # A root without "form"/"run" is the flat form shape
        data = raw if ("form" in raw or "run" in raw) else {"form": raw}
        try:
            return AppInputs.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"{source}: inputs failed validation\n{e}") from e

    def _env_overrides(self, cfg: AppInputs) -> AppInputs:
        updates: dict[str, Any] = {}
        for suffix, attr in _ENV_TEXT_FIELDS:
            val = os.getenv(self.env_prefix + suffix)
            if val:
                updates[attr] = val

        as_of = os.getenv(self.env_prefix + "AS_OF")
        if as_of:
            try:
                updates["as_of"] = date.fromisoformat(as_of.strip())
            except ValueError:
                logger.debug("inputs: ignoring %sAS_OF=%r", self.env_prefix, as_of)

        if not updates:
            return cfg
        return cfg.model_copy(update={"run": cfg.run.model_copy(update=updates)})


def load_inputs(path: str | Path | None = None) -> AppInputs:
    return InputsLoader().load(path)
