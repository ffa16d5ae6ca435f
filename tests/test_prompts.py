from docassist.llm import SUMMARY_LABEL, enhance_prompt, fix_grammar_prompt, label_summary, summarize_prompt


def test_prompts_quote_selected_text():
    assert enhance_prompt("draft") == (
        "Please enhance the following text while maintaining its core meaning. "
        "Make it more professional and engaging: \"draft\""
    )
    assert summarize_prompt("long text") == "Please provide a concise summary of the following text: \"long text\""
    assert fix_grammar_prompt("i has error") == "Please fix any grammar and style issues in the following text: \"i has error\""


def test_prompt_keeps_braces_in_selection():
    assert fix_grammar_prompt("use {text} and {0}").endswith("\"use {text} and {0}\"")


def test_summary_label_prefix():
    assert label_summary("Short.") == SUMMARY_LABEL + "Short."
    assert SUMMARY_LABEL.endswith("\n")
