# marketplace/schemas/common.py
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class RequestBody(BaseModel):
    """
    Request Body 的基底：snake_case 與 camelCase (e.g. mediaType) 兩種寫法都接受。
    不認得的欄位直接驗證失敗，不會被默默丟掉。
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

class MessageOut(BaseModel):
    message: str

def flatten_sections(data: Any, sections: Dict[str, Dict[str, str]]) -> Any:
    """
    把分組的 body (e.g. {"personalInfo": {...}, "pricing": {...}}) 攤平成單層欄位。
    sections: 群組名稱 -> {群組內的 key: 攤平後的欄位名}，沒列出的 key 原樣保留。
    巢狀一層的 key 用 "privacy.showContactInfo" 這種寫法。
    """
    if not isinstance(data, dict):
        return data

    flat = {key: value for key, value in data.items() if key not in sections}
    for section, renames in sections.items():
        group = data.get(section)
        if group is None:
            continue
        if not isinstance(group, dict):
            raise ValueError(f"'{section}' must be an object")

        for key, value in group.items():
            nested = any(name.startswith(f"{key}.") for name in renames)
            if nested and isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    path = f"{key}.{sub_key}"
                    # 沒對應的巢狀 key 保留原路徑，交給 extra="forbid" 擋下
                    flat[renames.get(path, path)] = sub_value
            else:
                flat[renames.get(key, key)] = value
    return flat
