from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.datetime_utils import parse_hhmm
from .container import Container, build_container
from .core.constants import DEFAULT_TENANT, EDIT_WINDOW_FUTURE_MINUTES, EDIT_WINDOW_PAST_DAYS, TENANT_DB_TEMPLATE
from .reports.model import ReportPolicy
from .tenancy.resolver import TenantRegistry
from .web.errors import register_error_handlers
from .web.tenant import install_tenant_resolution

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


def report_policy(settings) -> ReportPolicy:
    defaults = ReportPolicy()
    late = getattr(settings, "LATE_CUTOFF", None)
    early = getattr(settings, "EARLY_LEAVE_CUTOFF", None)
    return ReportPolicy(
        late_cutoff=parse_hhmm(late) if late else defaults.late_cutoff,
        early_leave_cutoff=parse_hhmm(early) if early else defaults.early_leave_cutoff,
        regular_hours_per_day=float(getattr(settings, "REGULAR_HOURS_PER_DAY", defaults.regular_hours_per_day)),
    )


def build_from_settings(settings) -> Container:
    registry = TenantRegistry(
        db_template=getattr(settings, "TENANT_DB_TEMPLATE", TENANT_DB_TEMPLATE),
        default_tenant=getattr(settings, "DEFAULT_TENANT", DEFAULT_TENANT),
    )
    return build_container(
        db_config=getattr(settings, "DB_CONFIG"),
        registry=registry,
        policy=report_policy(settings),
        subtract_breaks=bool(getattr(settings, "SUBTRACT_BREAKS", True)),
        edit_future_minutes=int(getattr(settings, "EDIT_WINDOW_FUTURE_MINUTES", EDIT_WINDOW_FUTURE_MINUTES)),
        edit_past_days=int(getattr(settings, "EDIT_WINDOW_PAST_DAYS", EDIT_WINDOW_PAST_DAYS)),
    )


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    container = build_from_settings(settings)
    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s template=%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        container.registry.db_template,
    )

    install_tenant_resolution(app, container.registry)
    register_error_handlers(app)
    app.extensions["sphere_time"] = container

    return app
