from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml


DEFAULT_CONFIG_FILE_NAME = "config.yaml"
CONFIG_PATH_ENV = "STORE_CONFIG_PATH"

DEFAULT_CREDIT_RATE_MMK = 100
DEFAULT_MAX_PROOF_BYTES = 5 * 1024 * 1024


@dataclass(slots=True)
class CreditPackageConfig:
    credits: int
    popular: bool = False


@dataclass(slots=True)
class PaymentMethodConfig:
    id: str
    name: str
    description: str
    instructions: str


@dataclass(slots=True)
class StoreSettings:
    credit_rate_mmk: int
    packages: list[CreditPackageConfig]
    payment_methods: list[PaymentMethodConfig]
    max_proof_bytes: int = DEFAULT_MAX_PROOF_BYTES


@dataclass(slots=True)
class AdminSettings:
    """관리자 초기 지정 설정.

    bootstrap_email 과 같은 이메일로 처음 로그인한 유저는 role=admin 으로 생성된다.
    이후 권한 판단은 저장된 role 만 본다.
    """

    bootstrap_email: str | None = None


@dataclass(slots=True)
class OperatorSeed:
    name: str
    display_name: str
    color_scheme: str
    logo_url: str | None = None
    is_active: bool = True


@dataclass(slots=True)
class CategorySeed:
    name: str
    display_name: str
    icon: str
    sort_order: int = 0
    is_active: bool = True


@dataclass(slots=True)
class ProductSeed:
    name: str
    operator: str
    category: str
    price_mmk: int
    price_credits: float
    description: str | None = None
    sort_order: int = 0
    is_active: bool = True


@dataclass(slots=True)
class CatalogConfig:
    operators: list[OperatorSeed] = field(default_factory=list)
    categories: list[CategorySeed] = field(default_factory=list)
    products: list[ProductSeed] = field(default_factory=list)


@dataclass(slots=True)
class AppConfig:
    """store-service 설정 루트 (config.yaml)."""

    store: StoreSettings
    admin: AdminSettings
    catalog: CatalogConfig


def default_store_settings() -> StoreSettings:
    return StoreSettings(
        credit_rate_mmk=DEFAULT_CREDIT_RATE_MMK,
        packages=[
            CreditPackageConfig(credits=100),
            CreditPackageConfig(credits=250),
            CreditPackageConfig(credits=500, popular=True),
            CreditPackageConfig(credits=1000),
            CreditPackageConfig(credits=2500),
        ],
        payment_methods=[
            PaymentMethodConfig(
                id="kpay",
                name="KPay",
                description="Transfer via KPay app",
                instructions="Send payment to: 09123456789 (KPay)",
            ),
            PaymentMethodConfig(
                id="wavepay",
                name="WavePay",
                description="Transfer via WavePay app",
                instructions="Send payment to: 09123456789 (WavePay)",
            ),
        ],
    )


def _find_config_path() -> Path | None:
    """STORE_CONFIG_PATH 가 있으면 그 경로를, 없으면 cwd 부터 상위로 올라가며 config.yaml 을 찾는다."""

    explicit = os.getenv(CONFIG_PATH_ENV, "").strip()
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            raise RuntimeError(f"{CONFIG_PATH_ENV} points to a missing file: {path}")
        return path

    current = Path.cwd()
    for directory in (current, *current.parents):
        candidate = directory / DEFAULT_CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def _as_int(value: Any, key: str, path: Path | None) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:  # noqa: TRY003
        raise RuntimeError(f"invalid {key} in {path}: {value!r}") from exc


def _as_float(value: Any, key: str, path: Path | None) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:  # noqa: TRY003
        raise RuntimeError(f"invalid {key} in {path}: {value!r}") from exc


def _required_str(item: dict, key: str, section: str, path: Path | None) -> str:
    value = str(item.get(key) or "").strip()
    if not value:
        raise RuntimeError(f"{section}.{key} is required in {path}")
    return value


def _optional_str(item: dict, key: str) -> str | None:
    value = item.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_store_settings(raw: dict, path: Path | None = None) -> StoreSettings:
    defaults = default_store_settings()
    if not raw:
        return defaults

    rate = _as_int(
        raw.get("credit_rate_mmk", DEFAULT_CREDIT_RATE_MMK),
        "store.credit_rate_mmk",
        path,
    )
    if rate <= 0:
        raise RuntimeError(f"store.credit_rate_mmk must be positive in {path}")

    packages: list[CreditPackageConfig] = []
    for item in raw.get("packages") or []:
        if not isinstance(item, dict):
            continue
        credits = _as_int(item.get("credits"), "store.packages[].credits", path)
        if credits <= 0:
            raise RuntimeError(f"store.packages[].credits must be positive in {path}")
        packages.append(
            CreditPackageConfig(credits=credits, popular=bool(item.get("popular")))
        )

    methods: list[PaymentMethodConfig] = []
    for item in raw.get("payment_methods") or []:
        if not isinstance(item, dict):
            continue
        methods.append(
            PaymentMethodConfig(
                id=_required_str(item, "id", "store.payment_methods[]", path).lower(),
                name=_required_str(item, "name", "store.payment_methods[]", path),
                description=str(item.get("description") or "").strip(),
                instructions=str(item.get("instructions") or "").strip(),
            )
        )

    max_proof_bytes = _as_int(
        raw.get("max_proof_bytes", DEFAULT_MAX_PROOF_BYTES),
        "store.max_proof_bytes",
        path,
    )

    return StoreSettings(
        credit_rate_mmk=rate,
        packages=packages or defaults.packages,
        payment_methods=methods or defaults.payment_methods,
        max_proof_bytes=max_proof_bytes,
    )


def parse_catalog(raw: dict, path: Path | None = None) -> CatalogConfig:
    catalog = CatalogConfig()
    if not raw:
        return catalog

    for item in raw.get("operators") or []:
        if not isinstance(item, dict):
            continue
        catalog.operators.append(
            OperatorSeed(
                name=_required_str(item, "name", "catalog.operators[]", path),
                display_name=_required_str(
                    item, "display_name", "catalog.operators[]", path
                ),
                color_scheme=str(item.get("color_scheme") or "").strip(),
                logo_url=_optional_str(item, "logo_url"),
                is_active=bool(item.get("is_active", True)),
            )
        )

    for item in raw.get("categories") or []:
        if not isinstance(item, dict):
            continue
        catalog.categories.append(
            CategorySeed(
                name=_required_str(item, "name", "catalog.categories[]", path),
                display_name=_required_str(
                    item, "display_name", "catalog.categories[]", path
                ),
                icon=str(item.get("icon") or "").strip(),
                sort_order=_as_int(
                    item.get("sort_order", 0), "catalog.categories[].sort_order", path
                ),
                is_active=bool(item.get("is_active", True)),
            )
        )

    for item in raw.get("products") or []:
        if not isinstance(item, dict):
            continue
        catalog.products.append(
            ProductSeed(
                name=_required_str(item, "name", "catalog.products[]", path),
                operator=_required_str(item, "operator", "catalog.products[]", path),
                category=_required_str(item, "category", "catalog.products[]", path),
                price_mmk=_as_int(
                    item.get("price_mmk"), "catalog.products[].price_mmk", path
                ),
                price_credits=_as_float(
                    item.get("price_credits"), "catalog.products[].price_credits", path
                ),
                description=_optional_str(item, "description"),
                sort_order=_as_int(
                    item.get("sort_order", 0), "catalog.products[].sort_order", path
                ),
                is_active=bool(item.get("is_active", True)),
            )
        )

    return catalog


def parse_config(data: dict, path: Path | None = None) -> AppConfig:
    admin_raw = data.get("admin") or {}
    bootstrap_email = _optional_str(admin_raw, "bootstrap_email")

    return AppConfig(
        store=parse_store_settings(data.get("store") or {}, path),
        admin=AdminSettings(
            bootstrap_email=bootstrap_email.lower() if bootstrap_email else None
        ),
        catalog=parse_catalog(data.get("catalog") or {}, path),
    )


def load_config() -> AppConfig:
    """config.yaml 을 읽어 AppConfig 로 반환한다. 파일이 없으면 기본값을 쓴다."""

    path = _find_config_path()
    if path is None:
        return parse_config({})

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise RuntimeError(f"{path} must contain a mapping at the top level")
    return parse_config(data, path)


@lru_cache(maxsize=1)
def get_app_config() -> AppConfig:
    """FastAPI DI 용. 프로세스당 한 번만 로드한다."""

    return load_config()
