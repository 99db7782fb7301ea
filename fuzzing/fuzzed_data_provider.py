from atheris import FuzzedDataProvider

from pdfruns.pdfops import OperatorKind, PDFOperatorEvent

_KINDS = list(OperatorKind)


class PdfrunsFuzzedDataProvider(FuzzedDataProvider):  # type: ignore[misc]
    def ConsumeRandomString(self) -> str:
        int_range = self.ConsumeIntInRange(0, min(self.remaining_bytes(), 64))
        return str(self.ConsumeUnicodeNoSurrogates(int_range))

    def ConsumeOperand(self) -> object:
        choice = self.ConsumeIntInRange(0, 5)
        if choice == 0:
            return self.ConsumeInt(4)
        elif choice == 1:
            return self.ConsumeRegularFloat()
        elif choice == 2:
            return self.ConsumeRandomString()
        elif choice == 3:
            return bytes(self.ConsumeBytes(self.ConsumeIntInRange(0, 16)))
        elif choice == 4:
            return [self.ConsumeOperand() for _ in range(self.ConsumeIntInRange(0, 4))]
        return None

    def ConsumeEvent(self) -> PDFOperatorEvent:
        if self.ConsumeProbability() < 0.05:
            kind: object = self.ConsumeRandomString()
        else:
            kind = self.PickValueInList(_KINDS)
        nargs = self.ConsumeIntInRange(0, 6)
        args = [self.ConsumeOperand() for _ in range(nargs)]
        return PDFOperatorEvent.create(kind, *args)  # type: ignore[arg-type]

    def ConsumeEvents(self, max_count: int) -> list[PDFOperatorEvent]:
        count = self.ConsumeIntInRange(0, max_count)
        return [self.ConsumeEvent() for _ in range(count)]
