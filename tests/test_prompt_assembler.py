from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError

from prompt_assembly.core.errors import PromptProcessingError, PromptTooLargeError
from prompt_assembly.domain.assembler import AssemblerConfig, ContextSettings, InvocationInput
from prompt_assembly.runtime.assembler import PromptAssembler
from tests.fixtures.configs import greet_config


def test_known_template_is_rendered_with_variables() -> None:
    # Arrange
    assembler = PromptAssembler(greet_config(max_tokens=100))

    # Act
    result = assembler.invoke(InvocationInput(template_id='greet', variables={'name': 'Ada'}))

    # Assert
    assert result.rendered_text == 'Hello Ada!'
    assert result.metadata.template_used == 'greet'
    assert result.metadata.variables_replaced_count == 1
    assert result.metadata.estimated_tokens == 3
    assert result.metadata.context_included is False


def test_unknown_template_falls_back_to_prompt() -> None:
    assembler = PromptAssembler(greet_config(max_tokens=100))

    result = assembler.invoke(
        InvocationInput(template_id='missing', prompt='Hi {{name}}', variables={'name': 'Bo'})
    )

    assert result.rendered_text == 'Hi Bo'
    assert result.metadata.template_used is None


def test_unknown_template_matches_omitting_template_id() -> None:
    assembler = PromptAssembler(greet_config(max_tokens=100))
    variables = {'name': 'Bo'}

    with_unknown = assembler.invoke(InvocationInput(template_id='missing', prompt='Hi {{name}}', variables=variables))
    without = assembler.invoke(InvocationInput(prompt='Hi {{name}}', variables=variables))

    assert with_unknown == without


def test_template_ignores_prompt_when_known() -> None:
    assembler = PromptAssembler(greet_config())

    result = assembler.invoke(InvocationInput(template_id='greet', prompt='raw text', variables={'name': 'Ada'}))

    assert 'raw text' not in result.rendered_text
    assert result.rendered_text != 'Hello {{name}}!'


def test_context_keeps_only_trailing_history() -> None:
    # Arrange
    config = AssemblerConfig(
        context_settings=ContextSettings(max_tokens=1000, include_history=True, history_length=2),
    )
    assembler = PromptAssembler(config)

    # Act
    result = assembler.invoke(InvocationInput(prompt='Q', context=['a', 'b', 'c']))

    # Assert
    assert result.rendered_text == 'Context 1: "b"\nContext 2: "c"\n\nQ'
    assert result.metadata.context_included is True


def test_context_shorter_than_history_is_kept_whole() -> None:
    config = AssemblerConfig(
        context_settings=ContextSettings(max_tokens=1000, include_history=True, history_length=5),
    )
    assembler = PromptAssembler(config)

    result = assembler.invoke(InvocationInput(prompt='Q', context=[{'role': 'user', 'text': 'hi'}]))

    assert result.rendered_text == 'Context 1: {"role":"user","text":"hi"}\n\nQ'


@pytest.mark.parametrize(
    ('include_history', 'history_length', 'context', 'expected'),
    [
        (True, 2, ['a'], True),
        (False, 2, ['a'], False),
        (True, 0, ['a'], False),
        (True, 2, [], False),
        (True, 2, None, False),
    ],
)
def test_context_included_flag(include_history, history_length, context, expected) -> None:
    config = AssemblerConfig(
        context_settings=ContextSettings(
            max_tokens=1000,
            include_history=include_history,
            history_length=history_length,
        ),
    )
    assembler = PromptAssembler(config)

    result = assembler.invoke(InvocationInput(prompt='Q', context=context))

    assert result.metadata.context_included is expected
    assert result.rendered_text.startswith('Context 1:') is expected


def test_oversized_prompt_is_rejected() -> None:
    assembler = PromptAssembler(greet_config(max_tokens=1))

    with pytest.raises(PromptTooLargeError) as exc:
        assembler.invoke(InvocationInput(prompt='Hello'))

    assert exc.value.estimated_tokens == 2
    assert exc.value.max_tokens == 1
    assert 'exceeds maximum token limit' in str(exc.value)


def test_prompt_exactly_at_budget_is_accepted() -> None:
    assembler = PromptAssembler(greet_config(max_tokens=1))

    result = assembler.invoke(InvocationInput(prompt='Hey!'))

    assert result.metadata.estimated_tokens == 1


def test_context_counts_toward_the_budget() -> None:
    config = AssemblerConfig(
        context_settings=ContextSettings(max_tokens=3, include_history=True, history_length=1),
    )
    assembler = PromptAssembler(config)

    assert assembler.invoke(InvocationInput(prompt='Q')).metadata.estimated_tokens == 1
    with pytest.raises(PromptTooLargeError):
        assembler.invoke(InvocationInput(prompt='Q', context=['previous turn']))


def test_numeric_variable_is_serialized() -> None:
    config = AssemblerConfig(templates={'count': '{{count}} items'})
    assembler = PromptAssembler(config)

    result = assembler.invoke(InvocationInput(template_id='count', variables={'count': 3}))

    assert result.rendered_text == '3 items'


def test_call_variables_override_defaults() -> None:
    # Arrange
    config = AssemblerConfig(
        templates={'greet': 'Hello {{name}}!'},
        default_variables={'name': 'Default', 'tone': 'formal'},
    )
    assembler = PromptAssembler(config)

    # Act
    result = assembler.invoke(InvocationInput(template_id='greet', variables={'name': 'Ada'}))

    # Assert
    assert result.rendered_text == 'Hello Ada!'
    assert 'formal' not in result.rendered_text
    assert 'tone' not in result.rendered_text


def test_defaults_apply_without_call_variables() -> None:
    config = AssemblerConfig(templates={'greet': 'Hello {{name}}!'}, default_variables={'name': 'team'})
    assembler = PromptAssembler(config)

    assert assembler.invoke(InvocationInput(template_id='greet')).rendered_text == 'Hello team!'


def test_replaced_count_is_effective_map_size_not_hits() -> None:
    config = AssemblerConfig(default_variables={'a': 1, 'b': 2})
    assembler = PromptAssembler(config)

    result = assembler.invoke(InvocationInput(prompt='no placeholders', variables={'b': 3, 'c': 4}))

    assert result.metadata.variables_replaced_count == 3


@pytest.mark.parametrize('text', ['', 'a', 'abcd', 'abcde', 'x' * 17, 'Ünïcödé ✓'])
def test_estimated_tokens_is_ceil_of_quarter_length(text) -> None:
    assembler = PromptAssembler(greet_config(max_tokens=100))

    result = assembler.invoke(InvocationInput(prompt=text))

    assert result.metadata.estimated_tokens == math.ceil(len(result.rendered_text) / 4)


def test_empty_input_renders_empty_text() -> None:
    assembler = PromptAssembler(greet_config())

    result = assembler.invoke(InvocationInput())

    assert result.rendered_text == ''
    assert result.metadata.estimated_tokens == 0


def test_unserializable_variable_is_a_processing_error() -> None:
    assembler = PromptAssembler(greet_config())

    with pytest.raises(PromptProcessingError) as exc:
        assembler.invoke(InvocationInput(prompt='{{x}}', variables={'x': float('nan')}))

    assert str(exc.value).startswith('Prompt processing failed: ')
    assert isinstance(exc.value.__cause__, ValueError)


def test_unserializable_context_item_is_a_processing_error() -> None:
    config = AssemblerConfig(
        context_settings=ContextSettings(max_tokens=1000, include_history=True, history_length=3),
    )
    assembler = PromptAssembler(config)

    with pytest.raises(PromptProcessingError) as exc:
        assembler.invoke(InvocationInput(prompt='Q', context=[{'tags': {1, 2}}]))

    assert isinstance(exc.value.__cause__, TypeError)


def test_configuration_is_copied_at_construction() -> None:
    config = greet_config()
    assembler = PromptAssembler(config)

    config.templates['greet'] = 'Changed {{name}}'

    result = assembler.invoke(InvocationInput(template_id='greet', variables={'name': 'Ada'}))
    assert result.rendered_text == 'Hello Ada!'


def test_calls_do_not_observe_each_other() -> None:
    config = AssemblerConfig(templates={'greet': 'Hello {{name}}!'}, default_variables={'name': 'nobody'})
    assembler = PromptAssembler(config)
    names = [f'user-{i}' for i in range(50)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(
            pool.map(
                lambda name: assembler.invoke(InvocationInput(template_id='greet', variables={'name': name})),
                names,
            )
        )

    assert [r.rendered_text for r in results] == [f'Hello {name}!' for name in names]
    assert assembler.invoke(InvocationInput(template_id='greet')).rendered_text == 'Hello nobody!'


def test_describe_input_schema_is_static() -> None:
    schema = PromptAssembler(greet_config()).describe_input_schema()

    assert set(schema['properties']) == {'templateId', 'prompt', 'variables', 'context'}
    assert schema['properties']['context']['type'] == 'array'
    assert schema['required'] == []

    schema['properties'].clear()
    assert PromptAssembler(AssemblerConfig()).describe_input_schema()['properties']


def test_integral_floats_render_alike_everywhere() -> None:
    config = AssemblerConfig(
        context_settings=ContextSettings(max_tokens=1000, include_history=True, history_length=3),
    )
    assembler = PromptAssembler(config)

    result = assembler.invoke(
        InvocationInput(
            prompt='{{n}} {{xs}} {{obj}}',
            variables={'n': 3.0, 'xs': [3.0, 2.5], 'obj': {'k': -1.0}},
            context=[3.0, {'turn': 2.0}],
        )
    )

    assert result.rendered_text == 'Context 1: 3\nContext 2: {"turn":2}\n\n3 [3,2.5] {"k":-1}'


def _nested(depth: int) -> list:
    value: list = []
    for _ in range(depth):
        value = [value]
    return value


def test_deeply_nested_variable_is_a_processing_error() -> None:
    assembler = PromptAssembler(greet_config())

    with pytest.raises(PromptProcessingError) as exc:
        assembler.invoke(InvocationInput(prompt='{{deep}}', variables={'deep': _nested(5000)}))

    assert str(exc.value).startswith('Prompt processing failed: ')
    assert isinstance(exc.value.__cause__, RecursionError)


def test_deeply_nested_context_item_is_a_processing_error() -> None:
    config = AssemblerConfig(
        context_settings=ContextSettings(max_tokens=1000, include_history=True, history_length=1),
    )
    assembler = PromptAssembler(config)

    with pytest.raises(PromptProcessingError):
        assembler.invoke(InvocationInput(prompt='Q', context=[_nested(5000)]))


def test_variable_name_containing_closing_braces() -> None:
    assembler = PromptAssembler(greet_config())

    result = assembler.invoke(InvocationInput(prompt='{{a}}b}}', variables={'a}}b': 'X'}))

    assert result.rendered_text == 'X'


def test_unknown_input_fields_are_rejected() -> None:
    with pytest.raises(ValidationError):
        InvocationInput.model_validate({'templateID': 'greet'})

    assert InvocationInput.model_validate({'templateId': 'greet'}).template_id == 'greet'
