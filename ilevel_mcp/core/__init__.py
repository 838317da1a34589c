# core package: configuration, logging, errors, iLevel client and tool dispatcher
