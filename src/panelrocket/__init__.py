"""panelrocket - Deploy static websites to 1Panel."""
