from __future__ import annotations

import json

import pytest

from stateflow.machine import CatalogTranslator, translation_key


def test_translation_key_joins_type_and_name():
    assert translation_key("Order", "pay") == "Order:pay"


def test_catalog_translator_falls_back_to_key():
    translator = CatalogTranslator({"Order:pay": "Pay"})

    assert translator.translate("Order:pay") == "Pay"
    assert translator.translate("Order:ship") == "Order:ship"


def test_catalog_translator_loads_json(tmp_path):
    path = tmp_path / "labels.json"
    path.write_text(json.dumps({"Order:Paid": "已支付"}), encoding="utf-8")

    translator = CatalogTranslator.from_json(path)

    assert translator.translate("Order:Paid") == "已支付"


def test_catalog_translator_rejects_non_object_json(tmp_path):
    path = tmp_path / "labels.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        CatalogTranslator.from_json(path)
