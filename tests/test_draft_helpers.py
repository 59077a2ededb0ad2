import pytest

from draft_utils import build_user_prompt, get_system_prompt, select_mode
from draft_utils.draft_prompts import DEFAULT_PROMPT, LOWERED_ENTRY_PROMPT, SYSTEM_PROMPT
from models.draft import GenerateRequest, Mode


@pytest.mark.parametrize(
    "contexts, expected",
    [
        (None, Mode.DEFAULT),
        ([], Mode.DEFAULT),
        (["子育て中の人"], Mode.LOWERED_ENTRY),
        (["a", "b"], Mode.LOWERED_ENTRY),
    ],
)
def test_select_mode(contexts, expected):
    assert select_mode(contexts) == expected


def test_mode_values():
    assert Mode.DEFAULT.value == "default"
    assert Mode.LOWERED_ENTRY.value == "lowered_entry"


def test_system_prompt():
    assert get_system_prompt() == SYSTEM_PROMPT
    assert SYSTEM_PROMPT.startswith("あなたは KIKU（きく）です。")


def test_default_prompt_interpolates_input():
    request = GenerateRequest(theme="地域の図書館", background="回答が少ない")
    prompt = build_user_prompt(request, Mode.DEFAULT)

    assert prompt.startswith(DEFAULT_PROMPT)
    assert "テーマ：地域の図書館\n背景：回答が少ない\n\n" in prompt
    assert "声が届いていないと感じられる人たち" not in prompt
    assert prompt.endswith("上記の状況に基づいて、問いの下書きを生成してください。")


def test_lowered_entry_prompt_lists_contexts():
    request = GenerateRequest(
        theme="地域の図書館",
        background="回答が少ない",
        unheard_contexts=["子育て中の人", "平日に働いている人"],
    )
    prompt = build_user_prompt(request, Mode.LOWERED_ENTRY)

    assert prompt.startswith(LOWERED_ENTRY_PROMPT)
    assert (
        "背景：回答が少ない\n\n声が届いていないと感じられる人たち：\n"
        "- 子育て中の人\n- 平日に働いている人\n\n"
    ) in prompt


def test_user_text_is_not_escaped():
    request = GenerateRequest(theme="{braces} and {theme}", background="  spaced  ")
    prompt = build_user_prompt(request, Mode.DEFAULT)

    assert "テーマ：{braces} and {theme}\n" in prompt
    assert "背景：  spaced  " in prompt


def test_prompts_ask_for_json_output():
    for mode_prompt in (DEFAULT_PROMPT, LOWERED_ENTRY_PROMPT):
        assert '"explanation"' in mode_prompt
        assert '"questions"' in mode_prompt
        assert '"note"' in mode_prompt
    assert "【lowered_entry 追加制約】" in LOWERED_ENTRY_PROMPT
    assert "`" not in LOWERED_ENTRY_PROMPT
