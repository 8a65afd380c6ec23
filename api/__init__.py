"""
Project service access for the Project Creation Wizard: the Draft Resource
Client used by the wizard and the development service it can talk to.
"""
