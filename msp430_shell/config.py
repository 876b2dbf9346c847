"""
MSP430 Debug Shell: Limits and Constants
=======================================

Every size limit that is visible to the user lives here so that tests and
the engine agree on them. Changing one of these values changes observable
behaviour (silent truncation points, overflow errors), so treat them as
part of the command-line interface.
"""

# =============================================================================
#  EXPRESSION EVALUATOR
# =============================================================================
EXPR_STACK_SIZE = 32        # Capacity of both the operand and operator stack
EXPR_TOKEN_BUF_SIZE = 64    # Token buffer incl. terminator → 63 usable chars

# Fixed-width machine word used for all arithmetic
WORD_BITS = 32
WORD_MASK = (1 << WORD_BITS) - 1
WORD_SIGN = 1 << (WORD_BITS - 1)

# Characters allowed inside a symbol name (besides ASCII letters/digits)
SYMBOL_PUNCTUATION = "._$:"


# =============================================================================
#  TOKENIZER
# =============================================================================
# Same set as C isspace() in the "C" locale
WHITESPACE = " \t\n\v\f\r"


# =============================================================================
#  OPTIONS
# =============================================================================
TEXT_OPTION_SIZE = 128      # Text option buffer incl. terminator → 127 chars
OPTION_NAME_WIDTH = 32      # Right-aligned name column in "opt" listings


# =============================================================================
#  HELP LISTING
# =============================================================================
HELP_LINE_WIDTH = 72        # Column width for "help" name lists
HELP_MAX_NAMES = 128        # Names beyond this are silently dropped
HELP_INDENT = "    "


# =============================================================================
#  READER / PROMPTS
# =============================================================================
PROMPT = "(mspdebug) "
MODIFY_PROMPT = ("Symbols have not been saved since modification. "
                 "Continue (y/n)? ")

# Scripts may "read" other scripts up to this many levels deep
MAX_READ_DEPTH = 16

# Modification flags checked by modify_prompt()
MODIFY_SYMS = 0x01
MODIFY_ALL = 0x01
