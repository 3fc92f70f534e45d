from .models import *
from .REST import *
