"""Registry of special forms for the Theta evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table to dispatch special forms before ordinary
function application. The expander keeps a matching table of evaluated
argument positions in theta.expansion.positions.
"""

from theta.types.symbol import Symbol
from theta.evaluation.special_forms.set_form import setq_form
from theta.evaluation.special_forms.progn_form import progn_form
from theta.evaluation.special_forms.defmacro_form import defmacro_form
from theta.evaluation.special_forms.quote_forms import quote_form, quasiquote_form, unquote_form, unquote_splice_form
from theta.evaluation.special_forms.lambda_form import lambda_form
from theta.evaluation.special_forms.let_form import let_form
from theta.evaluation.special_forms.if_form import if_form
from theta.evaluation.special_forms.logic_forms import and_form, or_form
from theta.evaluation.special_forms.tagbody_forms import tagbody_form, go_form
from theta.evaluation.special_forms.gensym_form import gensym_form
from theta.evaluation.special_forms.macroexpand_forms import macroexpand1_form, macroexpand_form

SPECIAL_FORMS = {
    Symbol("setq"): setq_form,
    Symbol("progn"): progn_form,
    Symbol("defmacro"): defmacro_form,
    Symbol("quote"): quote_form,
    Symbol("quasiquote"): quasiquote_form,
    Symbol("unquote"): unquote_form,
    Symbol("unquote-splicing"): unquote_splice_form,
    Symbol("lambda"): lambda_form,
    Symbol("let"): let_form,
    Symbol("if"): if_form,
    Symbol("and"): and_form,
    Symbol("or"): or_form,
    Symbol("tagbody"): tagbody_form,
    Symbol("go"): go_form,
    Symbol("gensym"): gensym_form,
    Symbol("macroexpand-1"): macroexpand1_form,
    Symbol("macroexpand"): macroexpand_form,
}
