from .main import englishFromList, scriptPath
