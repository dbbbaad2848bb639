from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path

import yaml
from loguru import logger

from ..money import to_decimal
from ..project_paths import ProjectPaths


@dataclass(frozen=True, slots=True)
class TaxSlab:
    min_amount: Decimal
    rate_percent: Decimal


@dataclass(frozen=True, slots=True)
class TaxProfile:
    id: str
    rate_percent: Decimal | None = None
    slabs: tuple[TaxSlab, ...] = ()
    split_equally: bool = False
    label: str = "GST"
    split_labels: tuple[str, str] = ("CGST", "SGST")

    @classmethod
    def exempt(cls) -> "TaxProfile":
        return cls(id="exempt", rate_percent=Decimal(0))


@dataclass(frozen=True, slots=True)
class ReceiptLayout:
    hotel_name: str = "HOTEL RESTAURANT"
    tagline: str | None = None
    registration_line: str | None = None
    title: str = "TAX INVOICE"
    currency_symbol: str = "₹"
    footer: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class BillingRules:
    tax_profiles: dict[str, TaxProfile] = field(default_factory=dict)
    receipt_layout: ReceiptLayout = field(default_factory=ReceiptLayout)

    def profile(self, profile_id: str) -> TaxProfile:
        try:
            return self.tax_profiles[profile_id]
        except KeyError:
            known = ", ".join(sorted(self.tax_profiles)) or "none"
            raise KeyError(f"Unknown tax profile {profile_id!r} (known: {known})") from None

    @classmethod
    def detect(cls, start: Path | None = None) -> "BillingRules":
        return cls.load_from_dir(ProjectPaths.detect(start).rules_dir)

    @classmethod
    def load_from_dir(cls, rules_dir: Path) -> "BillingRules":
        profiles_doc = _load_yaml(rules_dir / "tax_profiles.yml")
        receipt_doc = _load_yaml(rules_dir / "receipt.yml")

        profiles: dict[str, TaxProfile] = {}
        for raw in ((profiles_doc or {}).get("profiles") or []):
            profile = _parse_profile(raw)
            profiles[profile.id] = profile

        layout = _parse_layout((receipt_doc or {}).get("receipt") or {})

        logger.debug("Loaded {} tax profiles from {}", len(profiles), rules_dir)
        return cls(tax_profiles=profiles, receipt_layout=layout)


def _parse_profile(raw: dict) -> TaxProfile:
    profile_id = str(raw["id"])
    rate = raw.get("rate_percent")
    slabs = [
        TaxSlab(min_amount=to_decimal(s.get("min_amount") or 0), rate_percent=to_decimal(s["rate_percent"]))
        for s in (raw.get("slabs") or [])
    ]
    slabs.sort(key=lambda s: s.min_amount)

    if rate is None and not slabs:
        raise ValueError(f"Tax profile {profile_id!r} needs either rate_percent or slabs.")
    if rate is not None and slabs:
        raise ValueError(f"Tax profile {profile_id!r} sets both rate_percent and slabs.")

    split_labels = list(raw.get("split_labels") or ["CGST", "SGST"])
    if len(split_labels) != 2:
        raise ValueError(f"Tax profile {profile_id!r} needs exactly two split_labels.")

    return TaxProfile(
        id=profile_id,
        rate_percent=to_decimal(rate) if rate is not None else None,
        slabs=tuple(slabs),
        split_equally=bool(raw.get("split_equally", False)),
        label=str(raw.get("label") or "GST"),
        split_labels=(str(split_labels[0]), str(split_labels[1])),
    )


def _parse_layout(raw: dict) -> ReceiptLayout:
    defaults = ReceiptLayout()
    return ReceiptLayout(
        hotel_name=str(raw.get("hotel_name") or defaults.hotel_name),
        tagline=raw.get("tagline"),
        registration_line=raw.get("registration_line"),
        title=str(raw.get("title") or defaults.title),
        currency_symbol=str(raw.get("currency_symbol") or defaults.currency_symbol),
        footer=tuple(str(ln) for ln in (raw.get("footer") or [])),
    )


def _load_yaml(path: Path) -> dict | None:
    if not path.exists():
        raise FileNotFoundError(str(path))
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping at {path}, got {type(data).__name__}.")
    return data
