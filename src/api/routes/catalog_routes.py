"""Catalog Routes - 상품 목록 위젯 HTML 프래그먼트

HTTP Layer 는 요청 검증과 컨텍스트 구성만 담당하고
렌더링/캐시/오류 처리는 클라이언트(위젯)에 위임합니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from src.clients import ClientContext, create_client
from src.core.config import settings
from src.core.config_source import ConfigSource
from src.core.database import get_db
from src.core.i18n import get_translator
from src.core.logging import logger
from src.core.security import (
    CSRF_COOKIE_NAME,
    SecurityValidator,
    generate_csrf_token,
    is_valid_csrf_token,
)
from src.schemas.catalog_schema import CatalogFragmentResponse
from src.services.impl.cache_service import HtmlCacheService
from src.services.impl.product_controller import ProductController
from src.services.impl.template_service import TemplateService

from .dependencies import get_cache_service, get_template_service, get_widget_config

router = APIRouter(tags=["catalog"])


def _validate(uid: str, locale: Optional[str]) -> str:
    locale = locale or settings.default_locale
    try:
        SecurityValidator.validate_uid(uid)
        SecurityValidator.validate_locale(locale)
    except ValueError as e:
        logger.warning(f"[API] Input validation failed: {e}")
        raise HTTPException(status_code=400, detail=f"입력 검증 실패: {e}")
    return locale


def _csrf_token(request: Request) -> str:
    token = request.cookies.get(CSRF_COOKIE_NAME)
    return token if is_valid_csrf_token(token) else generate_csrf_token()


def _render(
    uid: str,
    locale: str,
    currency: str,
    csrf_token: str,
    db: Session,
    cache: Optional[HtmlCacheService],
    renderer: TemplateService,
    config: ConfigSource,
):
    context = ClientContext(
        config=config,
        renderer=renderer,
        translator=get_translator(locale),
        controller_factory=lambda: ProductController(db),
        cache=cache,
        locale=locale,
        currency=currency,
        csrf_token=csrf_token,
    )
    client = create_client(context, "catalog/product")
    client.process()
    header = client.get_header(uid)
    body = client.get_body(uid)
    return header, body, list(client.view.errors)


@router.get("/catalog/product", response_class=HTMLResponse)
def catalog_product_html(
    request: Request,
    uid: str = "",
    locale: Optional[str] = None,
    currency: str = "",
    db: Session = Depends(get_db),
    cache: Optional[HtmlCacheService] = Depends(get_cache_service),
    renderer: TemplateService = Depends(get_template_service),
    config: ConfigSource = Depends(get_widget_config),
):
    """상품 목록 위젯 HTML (헤더 + 본문)"""
    locale = _validate(uid, locale)
    token = _csrf_token(request)

    header, body, errors = _render(uid, locale, currency, token, db, cache, renderer, config)
    if errors:
        logger.info(f"[API] Catalog product rendered with {len(errors)} errors")

    response = HTMLResponse(content=header + body)
    response.set_cookie(CSRF_COOKIE_NAME, token, httponly=True, samesite="lax")
    return response


@router.get("/api/v1/catalog/product", response_model=CatalogFragmentResponse)
def catalog_product_json(
    request: Request,
    uid: str = "",
    locale: Optional[str] = None,
    currency: str = "",
    db: Session = Depends(get_db),
    cache: Optional[HtmlCacheService] = Depends(get_cache_service),
    renderer: TemplateService = Depends(get_template_service),
    config: ConfigSource = Depends(get_widget_config),
):
    """상품 목록 위젯 프래그먼트 (JSON)"""
    locale = _validate(uid, locale)
    token = _csrf_token(request)

    header, body, errors = _render(uid, locale, currency, token, db, cache, renderer, config)
    return CatalogFragmentResponse(header=header, body=body, errors=errors)
