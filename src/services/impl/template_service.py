"""Jinja2 템플릿 렌더링 서비스

템플릿 ID 는 templates 디렉터리 기준 상대 경로에서 확장자를 뺀 값입니다.
(예: catalog/product/body-standard -> catalog/product/body-standard.html)
"""
from typing import Any, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from src.core.config import settings
from src.core.exceptions import TemplateNotFoundException
from src.core.logging import logger
from src.utils.resource_loader import get_resource_path


class TemplateService:
    """템플릿 렌더러"""

    def __init__(self, templates_dir: Optional[str] = None, extension: str = ".html"):
        """
        Args:
            templates_dir: 템플릿 디렉터리 (상대 경로는 resources/ 기준)
            extension: 템플릿 파일 확장자
        """
        self.templates_path = get_resource_path(templates_dir or settings.templates_dir)
        self.extension = extension
        self.env = Environment(
            loader=FileSystemLoader(self.templates_path),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_id: str, variables: Mapping[str, Any]) -> str:
        """
        템플릿 렌더링
        
        Args:
            template_id: 템플릿 ID
            variables: 템플릿 변수
            
        Returns:
            렌더링 결과

        Raises:
            TemplateNotFoundException: 템플릿 파일 없음
        """
        try:
            template = self.env.get_template(f"{template_id}{self.extension}")
        except TemplateNotFound as e:
            logger.warning(f"Template not found: {template_id} (in {self.templates_path})")
            raise TemplateNotFoundException(template_id) from e
        return template.render(**variables)
