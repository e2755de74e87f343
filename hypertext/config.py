"""
Global configuration.
"""

#####################################################################################################################################################
#####
#####  COMPILER
#####

DEBUG = False               # if True, every compiled template prints a one-line summary of its compilation stages

TEMPLATE_NAME = '<template>'    # pseudo-filename of code objects compiled from embedded expressions; shown in tracebacks

CACHE_TEMPLATES = True      # if True, rsx() and maud() memoize compiled templates by (syntax, source)


#####################################################################################################################################################
#####
#####  OUTPUT
#####

DOCTYPE = '<!DOCTYPE html>'

CONTENT_TYPE = 'text/html; charset=utf-8'       # content type of HTTP responses produced by framework adapters
