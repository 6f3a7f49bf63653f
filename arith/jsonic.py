from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel


def dumps(obj: Any) -> str:
    """
    JSON-дампер для ответов CLI: одна строка на ответ.
    Pydantic-модели сериализуются с camelCase-алиасами; ensure_ascii=False;
    завершающий перевод строки добавляет CLI.
    """
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json", by_alias=True)
    return json.dumps(obj, ensure_ascii=False)
