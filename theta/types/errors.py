class ThetaError(Exception):
    """ Base class for all Theta errors"""
    pass

class ThetaInvalidSymbol(ThetaError):
    """ Raised when a non-symbol is used where a name is required"""
    pass

class ThetaSyntaxError(ThetaError):
    """ Raised when a special form or lambda list is malformed"""

class ThetaTypeError(ThetaError):
    """ Raised when a value has the wrong kind for an operation"""

class ArityError(ThetaError):
    """ Raised when a required parameter is missing or excess arguments have no rest parameter"""

class UnboundVariableError(ThetaError):
    """ Raised when a symbol is referenced or assigned before it is bound"""

class ImproperSpliceError(ThetaError):
    """ Raised when unquote-splicing yields something other than a proper list in non-final position"""

class NestedTemplateUnsupportedError(ThetaError):
    """ Raised when a quasiquote template contains a second quasiquote level"""

class ExpansionDepthExceededError(ThetaError):
    """ Raised when macro expansion runs past the configured depth bound"""

class UndefinedLabelError(ThetaError):
    """ Raised when go targets a label no enclosing active tagbody defines"""
