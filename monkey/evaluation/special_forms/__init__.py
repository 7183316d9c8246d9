"""Registry of special forms for the Monkey evaluator.

Maps callee names to handlers that receive their argument nodes unevaluated.
The evaluator consults this table before ordinary function application.
"""

from monkey.evaluation.special_forms.quote_forms import quote_form

SPECIAL_FORMS = {
    "quote": quote_form,
}
