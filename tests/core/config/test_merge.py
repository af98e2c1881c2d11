# tests/core/config/test_merge.py
"""
Testes da política de merge de configuração.

Este módulo valida o comportamento de `merge`, responsável por combinar
duas Configs (aplicação -> settings) em uma nova Config.

Os testes asseguram que:
- o merge é idempotente
- o lado direito vence em conflitos escalares
- aplicações disjuntas são preservadas em ordem
- o callback recebe (app, key, v1, v2) e só é invocado para valores diferentes
- mapas aninhados são mesclados recursivamente
- objetos de entrada não são mutados

Limites explícitos:
    - Não valida carregamento de arquivos
    - Não valida shape (ver test_validate.py)
"""

import pytest

try:
    from confmerge.core.config.merge import (
        deep_merge,
        merge,
        merge_many,
        merge_settings_callback,
    )
except Exception as e:  # noqa: BLE001
    merge = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o módulo de merge esteja disponível para os testes.

    Falha explicitamente com uma mensagem orientada quando `merge`
    não pode ser importado.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config merge module. Implement:\n"
            "- src/confmerge/core/config/merge.py (merge, deep_merge)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_merge_is_idempotent():
    """
    Verifica que mesclar uma Config com ela mesma não altera o resultado.

    Invariantes:
        - merge(C, C) == C, inclusive com mapas aninhados e listas
    """
    _require_imports()
    config = {
        "logger": {"level": "info", "backends": ["console"]},
        "ecto": {"Repo": {"pool_size": 10, "ssl": {"verify": True}}},
    }
    assert merge(config, config) == config


def test_merge_right_value_wins_on_conflict():
    _require_imports()
    assert merge({"app": {"k": 1}}, {"app": {"k": 2}}) == {"app": {"k": 2}}


def test_merge_disjoint_apps_preserves_order():
    _require_imports()
    out = merge({"app1": {}}, {"app2": {}})
    assert out == {"app1": {}, "app2": {}}
    assert list(out) == ["app1", "app2"]


def test_merge_app_present_in_one_side_is_carried_unchanged():
    _require_imports()
    left = {"a": {"x": 1}, "shared": {"k": 1}}
    right = {"shared": {"j": 2}, "b": {"y": [1, 2]}}
    assert merge(left, right) == {
        "a": {"x": 1},
        "shared": {"k": 1, "j": 2},
        "b": {"y": [1, 2]},
    }


def test_merge_nested_mappings_recursively():
    """
    Verifica que, sem callback, mapas aninhados são mesclados recursivamente.

    Decisões arquiteturais:
        - mapa + mapa → merge recursivo
        - listas e escalares → o lado direito vence
    """
    _require_imports()
    left = {"ecto": {"Repo": {"pool_size": 10, "ssl": {"verify": True, "ca": "a.pem"}}}}
    right = {"ecto": {"Repo": {"ssl": {"ca": "b.pem"}, "hosts": ["db1"]}}}
    assert merge(left, right) == {
        "ecto": {
            "Repo": {
                "pool_size": 10,
                "ssl": {"verify": True, "ca": "b.pem"},
                "hosts": ["db1"],
            }
        }
    }


def test_merge_mapping_replaced_by_scalar():
    _require_imports()
    out = merge({"app": {"k": {"a": 1}}}, {"app": {"k": "flat"}})
    assert out == {"app": {"k": "flat"}}


def test_merge_lists_are_replaced_not_concatenated():
    _require_imports()
    out = merge({"app": {"k": [1, 2]}}, {"app": {"k": [3]}})
    assert out == {"app": {"k": [3]}}


def test_merge_with_callback_receives_app_key_and_both_values():
    _require_imports()
    out = merge(
        {"app": {"k": "v1"}},
        {"app": {"k": "v2"}},
        lambda app, k, v1, v2: (app, k, v1, v2),
    )
    assert out == {"app": {"k": ("app", "k", "v1", "v2")}}


def test_merge_with_callback_not_invoked_for_equal_values():
    """
    Verifica que o callback nunca é chamado quando ambos os lados têm o
    mesmo valor para uma chave.
    """
    _require_imports()

    def _explode(app, key, v1, v2):
        raise AssertionError(f"callback must not be called for {app}.{key}")

    config = {"app": {"k": {"nested": [1, 2]}, "j": 3}}
    assert merge(config, {"app": {"k": {"nested": [1, 2]}, "j": 3}}, _explode) == config


def test_merge_with_callback_only_for_conflicting_keys():
    _require_imports()
    calls = []

    def _record(app, key, v1, v2):
        calls.append((app, key))
        return v1 + v2

    out = merge(
        {"app": {"a": 1, "b": 2}, "other": {"z": 0}},
        {"app": {"b": 3, "c": 4}, "other": {"z": 5}},
        _record,
    )
    assert out == {"app": {"a": 1, "b": 5, "c": 4}, "other": {"z": 5}}
    assert calls == [("app", "b"), ("other", "z")]


def test_merge_does_not_mutate_inputs():
    _require_imports()
    left = {"app": {"k": {"a": 1}, "lst": [1]}}
    right = {"app": {"k": {"b": 2}}}
    out = merge(left, right)

    out["app"]["k"]["c"] = 3
    out["app"]["lst"].append(2)

    assert left == {"app": {"k": {"a": 1}, "lst": [1]}}
    assert right == {"app": {"k": {"b": 2}}}


def test_merge_accepts_pair_sequences():
    _require_imports()
    out = merge([("app", [("k", 1)])], [("app", [("j", 2)]), ("other", [])])
    assert out == {"app": {"k": 1, "j": 2}, "other": {}}


def test_merge_settings_callback_accumulates_options():
    """
    Verifica o callback usado por declarações de chave única: opções
    sucessivas para a mesma chave se acumulam.
    """
    _require_imports()
    out = merge(
        {"ecto": {"Repo": {"a": 1}}},
        {"ecto": {"Repo": {"b": 2}}},
        merge_settings_callback,
    )
    assert out == {"ecto": {"Repo": {"a": 1, "b": 2}}}


def test_merge_settings_callback_right_wins_for_non_mappings():
    _require_imports()
    assert merge_settings_callback("app", "k", {"a": 1}, "flat") == "flat"
    assert merge_settings_callback("app", "k", 1, 2) == 2


def test_deep_merge_simple_override():
    _require_imports()
    base = {"a": 1, "b": 2}
    override = {"b": 99}
    out = deep_merge(base, override)
    assert out == {"a": 1, "b": 99}
    assert base == {"a": 1, "b": 2}
    assert override == {"b": 99}


def test_merge_many_folds_in_order():
    _require_imports()
    out = merge_many([
        {"app": {"x": 1}},
        {"app": {"y": 2}},
        {"app": {"x": 3}, "other": {"z": 4}},
    ])
    assert out == {"app": {"x": 3, "y": 2}, "other": {"z": 4}}
    assert merge_many([]) == {}


def test_merge_right_value_wins_when_values_only_loosely_equal():
    """
    Verifica que valores de tipos diferentes nunca são tratados como
    iguais: `True` sobre `1` (e `1.0` sobre `1`) substitui o valor anterior.
    """
    _require_imports()
    assert merge({"app": {"debug": 1}}, {"app": {"debug": True}}) == {"app": {"debug": True}}
    out = merge({"app": {"ratio": 1}}, {"app": {"ratio": 1.0}})
    assert type(out["app"]["ratio"]) is float

    nested = deep_merge({"a": {"flags": [0, 1]}}, {"a": {"flags": [False, True]}})
    assert [type(v) for v in nested["a"]["flags"]] == [bool, bool]


def test_merge_with_callback_invoked_for_zero_and_false():
    _require_imports()
    calls = []

    def _record(app, key, v1, v2):
        calls.append((v1, v2))
        return v2

    out = merge({"app": {"k": 0}}, {"app": {"k": False}}, _record)

    assert calls == [(0, False)]
    assert out["app"]["k"] is False
